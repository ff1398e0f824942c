from __future__ import annotations

COMPLEXITY_LEVELS = {
    1: "beginner: plain everyday language, no jargon, short sentences",
    2: "intermediate: simple language, introduce key terms with definitions",
    3: "advanced: precise terminology, assume basic familiarity with the field",
    4: "expert: dense technical language, focus on nuance and edge cases",
    5: "academic: scholarly register, theoretical framing, rigorous definitions",
}

JSON_RULES = """Output MUST be valid JSON only. No markdown, no commentary.
JSON MUST match the schema shown in the user message exactly.
Be faithful to the source; do not invent facts."""


def audience(complexity_level: int) -> str:
    level = min(5, max(1, int(complexity_level)))
    return f"Target audience level {level} ({COMPLEXITY_LEVELS[level]})."


SUMMARY_SYSTEM = """You are an expert at creating clear, concise summaries.
Create a 2-paragraph summary that captures the key points and main ideas.
{audience}"""

SUMMARY_USER_TEMPLATE = """Summarize this content in exactly 2 paragraphs:

{content}"""


FLASHCARDS_SYSTEM = """You are an expert at creating educational flashcards.
Generate 5-10 question-answer pairs that help learners memorize key concepts.
{audience}
""" + JSON_RULES

FLASHCARDS_USER_TEMPLATE = """Create flashcards from this content:

{content}

Return JSON with this exact shape:
{{"flashcards": [{{"question": "...", "answer": "..."}}]}}"""


QUIZ_SYSTEM = """You are an expert at creating educational quizzes.
Generate exactly 5 multiple-choice questions with 4 options each.
Mark the correct answer index (0-3) and provide brief explanations.
{audience}
""" + JSON_RULES

QUIZ_USER_TEMPLATE = """Create a 5-question multiple-choice quiz from this content:

{content}

Return JSON with this exact shape:
{{"questions": [{{"question": "...", "options": ["A", "B", "C", "D"], "correctAnswer": 1, "explanation": "..."}}]}}"""


MIND_MAP_SYSTEM = """You are an expert at creating mind maps.
Create a mind map with one central concept and 5-8 main branches, each with 1-3 subtopics.
Keep topics concise (1-3 words).
{audience}
""" + JSON_RULES

MIND_MAP_USER_TEMPLATE = """Create a mind map structure from this content:

{content}

Return JSON with this exact shape:
{{"centralTopic": "Main Topic", "branches": [{{"topic": "Branch Name", "subtopics": ["Subtopic 1", "Subtopic 2"]}}]}}"""


LEARNING_PATH_SYSTEM = """You are a learning designer who plans study paths.
Identify what the learner should know before this content, what to study next,
and 3-6 concrete steps to master it.
{audience}
""" + JSON_RULES

LEARNING_PATH_USER_TEMPLATE = """Design a learning path for this content:

{content}

Return JSON with this exact shape:
{{
  "currentTopic": "...",
  "prerequisiteTopics": ["..."],
  "nextTopics": ["..."],
  "recommendedSteps": [{{"title": "...", "description": "...", "estimatedTime": "30 minutes", "difficulty": 2, "resources": ["..."]}}],
  "skillLevel": "...",
  "totalEstimatedTime": "..."
}}"""


KEY_TERMS_SYSTEM = """You are a subject-matter glossary writer.
Extract 5-12 key terms from the content with clear definitions.
Rate each term's complexity from 1 (basic) to 5 (expert).
{audience}
""" + JSON_RULES

KEY_TERMS_USER_TEMPLATE = """Extract the key terms from this content:

{content}

Return JSON with this exact shape:
{{"keyTerms": [{{"term": "...", "definition": "...", "category": "...", "relatedTerms": ["..."], "examples": ["..."], "complexity": 3}}]}}"""


RESOURCES_SYSTEM = """You recommend well-known, real learning resources (official docs, reputable courses, classic books).
Only suggest resources you are confident exist; prefer stable canonical URLs.
{audience}
""" + JSON_RULES

RESOURCES_USER_TEMPLATE = """Recommend 4-8 additional resources for studying this content:

{content}

Return JSON with this exact shape:
{{"resources": [{{"title": "...", "type": "article|video|book|course|tutorial|documentation", "url": "https://...", "description": "...", "difficulty": 3, "estimatedTime": "..."}}]}}"""
