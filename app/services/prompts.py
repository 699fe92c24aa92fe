# OpenAI 호출에 사용하는 프롬프트 템플릿

SUMMARIZER_SYSTEM_PROMPT = (
    "You are a tool that summarizes PDF content. This tool is an application script that "
    "converts input PDF content and outputs the main points. Do not communicate with the user directly."
)

CHUNK_SUMMARY_PROMPT = """{system_prompt}

PDF content (Chunk {chunk_number} of {total_chunks}):
{chunk}

Please provide a concise summary of the main points from this section."""

FINAL_SUMMARY_PROMPT = """{system_prompt}

Combined summaries from PDF:
{combined_summaries}

Please provide a comprehensive final summary of the main points from this thesis/dissertation."""

EVALUATOR_SYSTEM_PROMPT = (
    "You are an expert academic evaluator. Provide fair and objective assessments. "
    "Always respond with valid JSON format."
)

MARKS_PROMPT = """Please evaluate this academic thesis/dissertation and provide estimated marks for P1, P2, and P3 phases.

Evaluation criteria:
- P1 (Proposal): Research question clarity, methodology appropriateness, feasibility
- P2 (Progress): Implementation quality, progress made, methodology execution
- P3 (Final): Overall quality, completeness, contribution to field, presentation

Provide marks out of 100 for each phase and brief justification.

Thesis content:
{combined_content}

Please respond in this exact JSON format:
{{
  "p1": {{
    "score": number,
    "justification": "string"
  }},
  "p2": {{
    "score": number,
    "justification": "string"
  }},
  "p3": {{
    "score": number,
    "justification": "string"
  }},
  "overall_assessment": "string"
}}"""

REVIEWER_SYSTEM_PROMPT = "You are an expert academic reviewer providing comprehensive thesis analysis."

ANALYSIS_PROMPT = """Please provide a comprehensive analysis of this academic thesis/dissertation including:

1. SUMMARY: Brief overview of the research
2. STRENGTHS: Key strengths and positive aspects
3. WEAKNESSES: Areas for improvement
4. METHODOLOGY: Assessment of research methods
5. CONTRIBUTION: Academic contribution and significance
6. RECOMMENDATIONS: Suggestions for improvement

Thesis content:
{combined_content}

Please provide a structured analysis with clear sections."""
