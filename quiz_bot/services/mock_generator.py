"""Offline question generator used when the user has no API key."""
import asyncio
import logging
import random
from typing import Optional

from quiz_bot.config import settings
from quiz_bot.models import (
    GenerationParams,
    MultipleChoiceQuestion,
    Question,
    QuestionType,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)

logger = logging.getLogger(__name__)

QUESTION_POOLS = {
    "Computer Science": [
        "What is the time complexity of searching an element in a balanced binary search tree?",
        "Which sorting algorithm has the best average-case time complexity?",
        "What does the acronym SQL stand for in database systems?",
        "Which data structure operates on a LIFO principle?",
        "What is the primary purpose of an operating system?",
        "Which protocol is primarily used for secure communication over the internet?",
    ],
    "Electrical Engineering": [
        "What is Ohm's Law?",
        "Which component stores electrical charge in a circuit?",
        "What is the unit of electrical resistance?",
        "What does AC stand for in electrical systems?",
        "Which semiconductor device is used for amplification?",
        "What is the purpose of a transformer in electrical systems?",
    ],
    "Mechanical Engineering": [
        "What is the First Law of Thermodynamics about?",
        "Which principle explains why airplanes can fly?",
        "What does RPM stand for in mechanical systems?",
        "Which material property indicates resistance to deformation?",
        "What is the purpose of a heat exchanger?",
        "What is the difference between stress and strain?",
    ],
    "Physics": [
        "What is Newton's Second Law of Motion?",
        "What is the SI unit of force?",
        "Which law of physics states that energy cannot be created or destroyed?",
        "What phenomenon explains the bending of light when it passes from one medium to another?",
        "What is the difference between speed and velocity?",
        "What is quantum entanglement?",
    ],
    "Mathematics": [
        "What is the derivative of a constant?",
        "What is the value of π (pi) to two decimal places?",
        "What is the Pythagorean theorem?",
        "What is a prime number?",
        "What is the formula for calculating the area of a circle?",
        "What is integration in calculus?",
    ],
}

TRUE_FALSE_POOLS = {
    "Computer Science": [
        "Binary search has a worst-case time complexity of O(log n).",
        "Java is a purely functional programming language.",
        "HTTP is a stateless protocol.",
        "The RAM in a computer loses its data when the power is turned off.",
        "A linked list provides O(1) random access to elements.",
        "IPv6 uses 128-bit addresses.",
    ],
    "Physics": [
        "The speed of light in a vacuum is constant.",
        "Mass and weight are the same thing.",
        "Sound can travel through a vacuum.",
        "Energy can be created but not destroyed.",
        "All objects fall at the same rate in a vacuum.",
        "The electron has a positive charge.",
    ],
}

# Option tables are keyed by question index (mod 6) and line up with QUESTION_POOLS
OPTION_TABLES = {
    "Computer Science": {
        0: ["O(1) - Constant time", "O(log n) - Logarithmic time", "O(n) - Linear time", "O(n²) - Quadratic time"],
        1: ["Bubble sort - O(n²)", "Merge sort - O(n log n)", "Quick sort - O(n log n) average case",
            "Selection sort - O(n²)"],
        2: ["Structured Query Language", "Standard Query Language", "System Query Logic",
            "Sequential Question Language"],
        3: ["Queue", "Stack", "Linked List", "Binary Tree"],
        4: ["Managing hardware resources", "Running applications", "Securing the computer", "All of the above"],
        5: ["HTTP", "HTTPS", "FTP", "SMTP"],
    },
    "Physics": {
        0: ["Force equals mass times acceleration", "Every action has an equal and opposite reaction",
            "Objects in motion tend to stay in motion", "Energy cannot be created or destroyed"],
        1: ["Newton", "Joule", "Watt", "Pascal"],
        2: ["Newton's First Law", "Law of Conservation of Energy", "Second Law of Thermodynamics", "Ohm's Law"],
        3: ["Reflection", "Refraction", "Diffraction", "Dispersion"],
        4: ["Speed is scalar, velocity is vector", "Speed includes direction, velocity doesn't",
            "They are the same thing", "Speed is slower than velocity"],
        5: ["When two particles are connected regardless of distance", "When particles move at the speed of light",
            "When particles have the same mass", "When particles have the same charge"],
    },
    "Mathematics": {
        0: ["Zero", "One", "Infinity", "The constant itself"],
        1: ["3.14", "3.13", "3.15", "3.16"],
        2: ["a² + b² = c² in a right triangle", "The sum of angles in a triangle is 180°",
            "The area of a triangle is ½bh", "Two triangles with the same angles are similar"],
        3: ["A number divisible only by 1 and itself", "A number divisible by 2",
            "A number with exactly three factors", "A number that cannot be negative"],
        4: ["πr²", "2πr", "πd", "r²π"],
        5: ["Finding the area under a curve", "Finding the slope of a tangent line",
            "Finding the rate of change", "Finding the limit of a function"],
    },
}

GENERIC_QUESTIONS = [
    "What is the fundamental principle of {topic} in {subject}?",
    "How does {topic} relate to other concepts in {subject}?",
    "What is the most important application of {topic} in {subject}?",
    "What are the key components of {topic}?",
    "Who is credited with developing the theory of {topic}?",
    "What problem does {topic} solve in {subject}?",
]

GENERIC_STATEMENTS = [
    "True or False: {topic} is considered a fundamental concept in {subject}.",
    "True or False: {topic} has practical applications outside of {subject}.",
    "True or False: {topic} was developed within the last fifty years.",
    "True or False: Understanding {topic} requires prior knowledge of other {subject} concepts.",
    "True or False: {topic} is usually taught in introductory {subject} courses.",
    "True or False: {topic} has no connection to mathematics.",
]

GENERIC_OPTIONS = [
    "The process of {topic} application in real-world scenarios",
    "The theoretical foundation of {topic}",
    "A practical approach to understanding {topic}",
    "The historical development of {topic}",
]


def get_mock_question(subject: str, topic: str, index: int, is_true_false: bool = False) -> str:
    """Pick question text for the given index, cycling through the subject's pool."""
    if is_true_false:
        pool = TRUE_FALSE_POOLS.get(subject)
        if pool:
            return pool[index % len(pool)]
        template = GENERIC_STATEMENTS[index % len(GENERIC_STATEMENTS)]
        return template.format(topic=topic, subject=subject)

    pool = QUESTION_POOLS.get(subject)
    if pool:
        return pool[index % len(pool)]
    template = GENERIC_QUESTIONS[index % len(GENERIC_QUESTIONS)]
    return template.format(topic=topic, subject=subject)


def get_mock_options(subject: str, topic: str, index: int) -> list[str]:
    """Four answer options for the given index."""
    table = OPTION_TABLES.get(subject)
    if table and (index % 6) in table:
        return list(table[index % 6])
    return [option.format(topic=topic) for option in GENERIC_OPTIONS]


def build_mock_question(
    params: GenerationParams, index: int, rng: Optional[random.Random] = None
) -> Question:
    """
    Build one question of the requested type.

    correct_option / answer are drawn at random and are not tied to the
    canned option or statement text.
    """
    rng = rng or random
    subject = params.subject.value
    topic = params.topic

    if params.question_type == QuestionType.MULTIPLE_CHOICE:
        return MultipleChoiceQuestion(
            question=get_mock_question(subject, topic, index),
            options=get_mock_options(subject, topic, index),
            correct_option=rng.randrange(4),
        )

    if params.question_type == QuestionType.TRUE_FALSE:
        return TrueFalseQuestion(
            question=get_mock_question(subject, topic, index, is_true_false=True),
            answer=rng.random() > 0.5,
            explanation=f"This is an explanation for question {index + 1} about {topic} in {subject}.",
        )

    return ShortAnswerQuestion(
        question=get_mock_question(subject, topic, index),
        suggested_answer=f"This is a suggested answer for question {index + 1} about {topic} in {subject}.",
    )


async def generate_mock(
    params: GenerationParams,
    rng: Optional[random.Random] = None,
    delay: Optional[float] = None,
) -> list[Question]:
    """
    Generate params.count offline questions.

    Args:
        params: Quiz settings
        rng: Random source for correct answers (module random by default)
        delay: Simulated latency in seconds (settings.MOCK_DELAY_SECONDS by default)

    Returns:
        Exactly params.count questions of params.question_type
    """
    if delay is None:
        delay = settings.MOCK_DELAY_SECONDS
    if delay > 0:
        await asyncio.sleep(delay)

    logger.info(
        "Generating %d offline %s questions: %s / %s",
        params.count, params.question_type.value, params.subject.value, params.topic,
    )
    return [build_mock_question(params, i, rng) for i in range(params.count)]
