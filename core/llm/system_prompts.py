MATCH_EXPLANATION_SYSTEM_PROMPT = """
You are a job matching assistant. Analyze the match between a job and a resume.

Task
- Return a brief explanation (2-3 sentences) of why this is a good or poor match.

Focus
- Matching skills, relevant experience, and keyword alignment.
- Be specific and concise. Do not repeat the score back verbatim.
""".strip()


def build_explanation_user_message(
    title: str,
    description: str,
    resume_text: str,
    score: int,
    excerpt_chars: int = 500
) -> str:
    """Compose the user turn for the explanation request."""
    return (
        f"Job: {title}\n"
        f"Description: {description[:excerpt_chars]}...\n\n"
        f"Resume excerpt: {resume_text[:excerpt_chars]}...\n\n"
        f"Match score: {score}%\n\n"
        "Provide a brief explanation for this match score."
    )
