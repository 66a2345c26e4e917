"""Authentiometer - trust assessment of video content using LLMs.

Given a YouTube URL (Gemini) or pasted text (Groq), produces a structured
assessment along three independent dimensions: authenticity, fact-checking
and scientific soundness.

Components:
- llm.prompts: prompt and output-schema builders
- llm.providers: Gemini and Groq adapters (strict JSON output)
- llm.retry: single hardened retry on malformed JSON
- llm.extract / llm.condense: extraction and condensation stages
- pipeline.run: orchestration (run_analysis, list_models_for)
- main_cli: command-line entry point
"""
