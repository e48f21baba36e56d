from quiz_bot.models import GenerationParams, QuestionType

TYPE_GUIDANCE = {
    QuestionType.MULTIPLE_CHOICE: (
        " Each question should have 4 options with only one correct answer."
        " The correct answer should be marked with the index (0-3)."
    ),
    QuestionType.TRUE_FALSE: (
        " Each question should have a boolean answer (true/false) and a brief explanation."
    ),
    QuestionType.SHORT_ANSWER: (
        " Each question should have a suggested answer that's concise but comprehensive."
    ),
}

TYPE_SCHEMAS = {
    QuestionType.MULTIPLE_CHOICE: """
{
  "type": "Multiple Choice",
  "question": string,      // The question text
  "options": string[],     // Array of exactly 4 options
  "correctOption": number  // Index of correct answer (0-3)
}""",
    QuestionType.TRUE_FALSE: """
{
  "type": "True/False",
  "question": string,      // The question statement
  "answer": boolean,       // true or false
  "explanation": string    // Why the statement is true or false
}""",
    QuestionType.SHORT_ANSWER: """
{
  "type": "Short Answer",
  "question": string,         // The question text
  "suggestedAnswer": string   // A sample correct answer
}""",
}


def build_system_prompt(params: GenerationParams) -> str:
    """Instruction describing the quiz and the exact JSON shape of one question."""
    question_type = params.question_type

    prompt = (
        f"Generate {params.count} unique {question_type.value} questions about {params.topic}"
        f" in the field of {params.subject.value}."
    )
    prompt += TYPE_GUIDANCE[question_type]
    prompt += (
        " Return the questions as a JSON array of objects."
        " Each object must match the following structure:\n"
    )
    prompt += TYPE_SCHEMAS[question_type]
    prompt += "\n\nOutput ONLY the JSON array, no extra text before or after."
    return prompt


def build_user_message(params: GenerationParams) -> str:
    return (
        f"Generate {params.count} unique quiz questions about {params.topic}"
        f" in {params.subject.value} in JSON format."
    )
