## Prompt templates (str.format placeholders; doubled braces are literal)

SYSTEM_PLANNER = """You are a senior curriculum architect.

You must return ONLY valid JSON (no markdown, no code fences, no commentary).
The JSON must match the given schema exactly.
"""

SYSTEM_TEACHER = """You are an experienced expert teacher.

You must return ONLY valid JSON (no markdown fences around it, no commentary).
Lesson text goes inside the "markdownContent" string with newlines escaped as \\n.
"""

SYLLABUS_PROMPT = """
Create a learning roadmap for the topic "{topic}".

Instructions:
1. Create 5-6 learning modules (at most 6)
2. Order them from fundamentals to advanced
3. Every module has 3-5 sub-topics

Module titles must be DESCRIPTIVE (at least 10 characters).
Do not use abbreviations like "M1" or "Module 1".

OUTPUT FORMAT:
1. Output pure JSON only, no other text
2. Compact JSON: one line, no indentation, no newlines between properties
3. Do not wrap the JSON in a code block
4. Start with {{ and end with }}
5. Make sure the JSON is complete (not cut off)
6. Every string value is a single line

Example of correct output:
{{"courseTitle":"Stock Investing for Beginners","overview":"Learn stock investing from the basics to advanced strategy","modules":[{{"title":"Stock Investing Fundamentals","description":"Understand what stocks are and how the market works","difficulty":"Beginner","estimatedTime":"15 minutes","subTopics":["What a stock is","How the stock market works","Types of stocks"]}}]}}

{format_instructions}
""".strip()

SYLLABUS_FORMAT_INSTRUCTIONS = (
    'Return ONLY valid JSON with the properties "courseTitle", "overview" '
    'and "modules" (array of objects).'
)

CONTENT_PROMPT = """
Course topic: "{topic}"
Module being taught: "{moduleTitle}"

Tasks:
1. Explain the material in depth, structured and easy to follow
2. Use Markdown for the lesson (headings, bold, lists, code)
3. Write 3 multiple-choice quiz questions that test understanding

OUTPUT FORMAT:
1. Output pure JSON only, no text before or after
2. Compact JSON structure (the lesson itself should stay complete and detailed)
3. Do not wrap the JSON in a code block
4. Start with {{ and end with }}
5. In "markdownContent" use the escape sequence \\n for newlines, never a literal line break
6. Every other string is a single line
7. Make sure the JSON is complete (not cut off)

Example of correct output:
{{"title":"Stock Investing Fundamentals","markdownContent":"# Stock Investing Fundamentals\\n\\nInvesting in stocks means **buying** a share of a company.\\n\\n## Key Ideas\\n\\n- **Dividend**: profit paid out to shareholders","quiz":[{{"question":"What is a dividend?","options":[{{"id":"a","text":"A gain from a rising share price","isCorrect":false}},{{"id":"b","text":"Part of the company profit paid to shareholders","isCorrect":true}}],"explanation":"A dividend is the share of profit a company pays out to its shareholders."}}]}}

{format_instructions}
""".strip()

CONTENT_FORMAT_INSTRUCTIONS = (
    'Return ONLY valid JSON with the properties "title", "markdownContent" '
    'and "quiz" (array of objects).'
)
