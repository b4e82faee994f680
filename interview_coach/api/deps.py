from interview_coach.ai.gemini_client import GeminiClient


def get_generator():
    client = GeminiClient()
    try:
        yield client
    finally:
        client.close()
