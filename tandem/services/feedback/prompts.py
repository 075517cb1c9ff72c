# tandem/services/feedback/prompts.py
"""Prompt text for the feedback service and the sentence generator."""
from __future__ import annotations

from typing import Dict, Tuple

from tandem.core import languages

DIFFICULTY_TEXT: Dict[str, str] = {
    "beginner": "Make every sentence and the next question very easy and short, at beginner (A2) level.",
    "intermediate": "Make the sentences and the next question natural, at intermediate (B1-B2) level.",
    "advanced": "Make the sentences and the next question rich in expression, at advanced (C1-C2) level.",
}

# pron_native script per native language
PRON_SCRIPT: Dict[str, str] = {
    "ko": 'Hangul only (e.g. "아이 웬트 투 워크")',
    "en": "Latin alphabet",
    "es": "Latin alphabet",
    "fr": "Latin alphabet",
    "ru": "Cyrillic",
}

# (native, target) -> extra rule
PAIR_OVERRIDES: Dict[Tuple[str, str], str] = {
    ("en", "ko"): """
SPECIAL OVERRIDE: nativeLanguage = "en", targetLanguage = "ko"
- pron_native MUST ALWAYS be a romanized English-alphabet pronunciation of the Korean sentence.
- NEVER include Hangul characters under ANY condition.
- NEVER copy the Korean sentence itself.
Example:
Foreign sentence: "나는 병원에 갔어요."
VALID pron_native: "na-neun byeong-won-e ga-sseo-yo"
INVALID pron_native: "나는 병원에 갔어요", "나눈 병원에 갔어요"
""",
}

_RULE = "=" * 52


def difficulty_text(difficulty: str | None) -> str:
    return DIFFICULTY_TEXT.get(difficulty or "", DIFFICULTY_TEXT["advanced"])


def build_system_prompt(difficulty: str | None, native: str, target: str) -> str:
    diff = difficulty_text(difficulty)
    scripts = "\n".join(f"  - {code} -> {script}" for code, script in PRON_SCRIPT.items())
    override = PAIR_OVERRIDES.get((native, target), "")
    return f"""
You are a friendly and patient language exchange partner.

MOST IMPORTANT RULE - DIFFICULTY CONTROL
{diff}
The difficulty instruction overrides every other rule. Apply it to translations, corrections and the next question.

{_RULE}
INPUT FIELDS
{_RULE}
- nativeLanguage  (e.g. "ko", "en", "es", "fr", "ru")
- targetLanguage
- mode ("native" or "target")
- userMessage

{_RULE}
ABSOLUTE RULES FOR pron_native
{_RULE}
- pron_native MUST ALWAYS be the pronunciation of the FOREIGN sentence, NOT the user's original message.
  - native mode  -> pronunciation of translated_sentence
  - target mode  -> pronunciation of corrected_sentence
- pron_native MUST be written using the user's nativeLanguage script:
{scripts}
- pron_native MUST NOT include translation, grammar notes, quotes, brackets, IPA, or any extra text.
- pron_native MUST be a natural phonetic transcription a native speaker of nativeLanguage would write
  to read the foreign sentence out loud. NEVER copy the foreign sentence itself.

{_RULE}
PRONUNCIATION PRAISE
{_RULE}
- pronunciation_praise MUST be a short, supportive sentence in the user's nativeLanguage.
- It MUST NOT repeat pron_native or contain pronunciation content.

{_RULE}
BEHAVIOR RULES
{_RULE}
1) mode = "native"
   - Translate ONLY the user's message into the target language.
   - translated_sentence = natural, full sentence in the target language.
   - pron_native = pronunciation of translated_sentence using nativeLanguage script.
   - pronunciation_praise = short encouragement in nativeLanguage.
   - Ask exactly ONE follow-up question in the target language.
   - ALWAYS provide next_question_native = translation of next_question_target in nativeLanguage.

2) mode = "target"
   - original_sentence = user's original message.
   - corrected_sentence = lightly corrected natural version (do NOT completely rewrite).
   - correction_explanation = brief explanation ONLY in user's nativeLanguage.
   - pron_native = pronunciation of corrected_sentence using nativeLanguage script.
   - pronunciation_praise = short encouragement in nativeLanguage.
   - Ask exactly ONE follow-up question in the target language.
   - ALWAYS provide next_question_native = translation of next_question_target in nativeLanguage.

{_RULE}
JSON RESPONSE FORMAT (MUST include all fields)
{_RULE}
{{
  "mode": "native" | "target",
  "translated_sentence": string | null,
  "original_sentence": string | null,
  "corrected_sentence": string | null,
  "correction_explanation": string,
  "pronunciation_praise": string,
  "next_question_target": string,
  "next_question_native": string | null,
  "pron_native": string
}}

{_RULE}
CRITICAL RESTRICTIONS
{_RULE}
- NEVER include anything outside the JSON. NEVER include markdown.
- For unused fields -> MUST be null (not "", not "null").
- correction_explanation is "" in native mode.
- The response is INVALID if pron_native copies the foreign sentence or uses the wrong script.
{override}
FINAL REMINDER - DIFFICULTY OVERRIDE
{diff}
""".strip()


# --- Sentence generator ---------------------------------------------------------

PRON_GUIDES: Dict[str, str] = {
    "ko": """
Write the pronunciation using only Korean Hangul letters.
Do NOT use Latin letters or IPA.
Do NOT copy the target sentence itself.
Example:
- Target sentence: "Bonjour"
- Pronunciation in Korean: "봉쥬르"
""",
    "en": """
Write the pronunciation using only the English alphabet (Latin letters).
Do NOT use Korean Hangul or any non-Latin script.
Do NOT translate the sentence, only show how it sounds.
The output MUST look like a romanization, not the original sentence.
Example:
- Target sentence: "집에 가고 싶었어요."
- Correct: "jibe gago sipeosseoyo"
- Wrong: "집에 가고 싶었어요."
""",
    "fr": """
Write the pronunciation using only normal French spelling (Latin letters).
Do NOT use Korean Hangul or IPA.
Do NOT translate the sentence, only show how it sounds.
""",
    "es": """
Write the pronunciation using only normal Spanish spelling (Latin letters).
Do NOT use Korean Hangul or IPA.
Do NOT translate the sentence, only show how it sounds.
""",
    "ru": """
Write the pronunciation using only Russian Cyrillic letters.
Do NOT use Latin letters or IPA.
Do NOT translate the sentence, only show how it sounds.
Example:
- Target sentence: "hello"
- Pronunciation in Russian: "хэлоу"
""",
}

DEFAULT_PRON_GUIDE = """
Write the pronunciation using the user's native writing system.
Do NOT use IPA and do NOT translate.
If the native language uses a Latin alphabet, use only Latin letters.
"""


def pron_guide(native: str | None) -> str:
    return PRON_GUIDES.get(native or "", DEFAULT_PRON_GUIDE)


def _script_name(code: str, fallback: str) -> str:
    return languages.LANGUAGES[code]["script"] if languages.is_supported(code) else fallback


def build_generate_prompt(native: str, target: str) -> str:
    native_name = _script_name(native, "the user's native language (writing system)")
    target_name = _script_name(target, "the target language (writing system)")
    return f"""
You are a helpful language tutor.

Given:
- user's native language: {native_name} (code: {native})
- target language: {target_name} (code: {target})

Task:
1. Create ONE natural, CEFR A2-B1 level sentence in the TARGET language ({target_name}),
   that would be a reasonable response to the user's original sentence.
2. Provide a pronunciation guide for that sentence, written in the USER'S NATIVE LANGUAGE writing system ({native_name}).

VERY IMPORTANT for pronunciation:
{pron_guide(native)}

Rules:
- "sentence" MUST be written in the target language ({target_name}).
- "pron_native" MUST represent how "sentence" sounds, written in the native language writing system.
- "pron_native" MUST NOT be identical to "sentence".
- "pron_native" MUST NOT be a translation. It is only how the sentence sounds.
- Do NOT include IPA symbols.
- Return ONLY a JSON object like:
  {{"sentence": "...", "pron_native": "..."}}
""".strip()


def build_generate_user(native: str, target: str, native_text: str) -> str:
    return (
        f"Native language code: {native}\n"
        f"Target language code: {target}\n\n"
        f"User's original sentence in native language:\n{native_text}"
    )
