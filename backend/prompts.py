FLASHCARD_PROMPT = """
You are an expert educator. Generate up to {count} flashcards from the study material below.

Use ONLY facts stated in the study material. If it does not support {count} good flashcards, write fewer.

Instructions:
- Create clear, concise questions that test key concepts
- Provide accurate, complete answers
- Focus on the most important points
- Make questions specific

Format every flashcard EXACTLY like this, with no numbering, markdown or commentary:
Q: [question]
A: [answer]

Study Material:
{content}
""".strip()


QUIZ_PROMPT = """
You are an expert educator. Generate up to {count} multiple-choice quiz questions from the study material below.

Use ONLY facts stated in the study material. If it does not support {count} good questions, write fewer.

Requirements:
- Each question has exactly 4 options (A, B, C, D)
- Only ONE option is correct
- Wrong answers (distractors) must be plausible but clearly incorrect
- Distractors should be related to the topic (not obviously wrong)
- Spread the correct answers evenly across A, B, C and D
- {difficulty_instructions}
- Include a brief explanation for why the correct answer is right

Format each question EXACTLY like this, with no numbering, markdown or commentary:
Q: [question]
A: [option A]
B: [option B]
C: [option C]
D: [option D]
CORRECT: [A/B/C/D]
EXPLAIN: [explanation of the correct answer]

Study Material:
{content}
""".strip()


DIFFICULTY_INSTRUCTIONS = {
    "easy": "Questions should test basic recall and recognition of facts",
    "medium": "Questions should test understanding and application of concepts",
    "hard": "Questions should require analysis, evaluation, and deep understanding",
}
