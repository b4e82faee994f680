SILENCE_TIMEOUT_SECONDS = 30
MAX_DURATION_SECONDS = 300

SYSTEM_MESSAGE = """You are a professional interview assistant. The candidate will answer the following question. Listen carefully and acknowledge their response when they finish speaking.

Question: {question}
{context}
Be encouraging and professional. When the candidate finishes, briefly acknowledge their answer and let them know they can move to the next question."""


def create_interview_assistant(question: str, context: dict | None = None) -> dict:
    """Assistant configuration handed to the voice SDK for one question."""
    context = context or {}
    context_lines = []
    if context.get("job_role"):
        context_lines.append(f"Role: {context['job_role']}")
    if context.get("interview_type"):
        context_lines.append(f"Interview type: {context['interview_type']}")

    return {
        "name": "Interview Assistant",
        "model": {
            "provider": "openai",
            "model": "gpt-3.5-turbo",
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_MESSAGE.format(
                        question=question,
                        context="\n".join(context_lines) + "\n" if context_lines else "",
                    ),
                }
            ],
            "temperature": 0.7,
        },
        "voice": {
            "provider": "openai",
            "voiceId": "alloy",
        },
        "firstMessage": f"Here's your question: {question}. Please take your time to answer.",
        "transcriber": {
            "provider": "deepgram",
            "model": "nova-2",
            "language": "en-US",
        },
        "endCallFunctionEnabled": False,
        "recordingEnabled": True,
        "silenceTimeoutSeconds": SILENCE_TIMEOUT_SECONDS,
        "maxDurationSeconds": MAX_DURATION_SECONDS,
    }
