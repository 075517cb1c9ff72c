# tandem/core/languages.py
"""
Supported languages and everything keyed by language code.

One table, one lookup function. A code that is missing from a table falls
back to English.
"""
from __future__ import annotations

from typing import Dict, List, Literal

LanguageCode = Literal["ko", "en", "fr", "es", "ru"]
FALLBACK = "en"

LANGUAGES: Dict[str, Dict] = {
    "ko": {
        "label": "한국어",
        "tts_lang": "ko-KR",
        "script": "Korean Hangul",
        "questions": [
            "오늘 하루는 어떻게 시작했나요?",
            "어제 저녁에는 무엇을 했나요?",
            "휴일에 보통 무엇을 하며 시간을 보내나요?",
        ],
        "ui": {
            "setup_title": "외국어 말하기, 모국어로 시작하세요",
            "setup_subtitle": "오늘 연습할 모국어와 목표 언어를 고르고,\n몇 세트를 연습할지 선택해 주세요.",
            "native_label": "모국어",
            "target_label": "목표 언어",
            "sets_question": "오늘은 몇 세트를 연습할까요?",
            "set_info": "1세트 ≈ 질문 1개 + 답변 + 외국어 문장 연습",
            "start_practice": "연습 시작하기",
            "practice_question_title": "질문",
            "native_answer_prompt": "모국어로 편하게 대답해보세요",
            "target_answer_prompt": "목표 언어로 대답해보세요",
            "speak_button_idle": "🎤 말해서 입력하기",
            "speak_button_active": "말하기 멈추기",
            "type_instead_hint": "또는 아래 칸에 직접 적어도 됩니다.",
            "input_placeholder": "여기에 한두 문장을 적거나, 말하기 버튼을 눌러 보세요.",
            "submit_button_idle": "피드백 받기",
            "submit_button_loading": "피드백 만드는 중...",
            "foreign_sentence_label": "외국어 문장",
            "listen_button": "🔊 소리로 듣기",
            "pron_label": "한국어식 발음",
            "done_message": "오늘 연습이 끝났습니다. 수고하셨어요!",
            "back_to_setup": "언어/세트 다시 선택",
            "retry_message": "문제가 생겼어요. 다시 시도해 주세요.",
            "empty_input": "먼저 문장을 말하거나 적어 주세요.",
            "turn_in_flight": "이전 답변을 아직 확인하고 있어요.",
            "recognition_unsupported": "이 기기에서는 음성 인식을 쓸 수 없어요. 답을 직접 적어 주세요.",
        },
    },
    "en": {
        "label": "English",
        "tts_lang": "en-US",
        "script": "English (Latin alphabet)",
        "questions": [
            "How did you start your day today?",
            "What did you do last evening?",
            "What do you usually do on holidays?",
        ],
        "ui": {
            "setup_title": "Speak a foreign language, starting from your native one",
            "setup_subtitle": "Choose your native and target language,\nand how many sets you want to practice today.",
            "native_label": "Native language",
            "target_label": "Target language",
            "sets_question": "How many sets do you want to practice today?",
            "set_info": "1 set ≈ 1 question + answer + foreign sentence practice",
            "start_practice": "Start practice",
            "practice_question_title": "Question",
            "native_answer_prompt": "Answer comfortably in your native language",
            "target_answer_prompt": "Try answering in your target language",
            "speak_button_idle": "🎤 Speak to fill in",
            "speak_button_active": "Stop speaking",
            "type_instead_hint": "Or type directly in the box below.",
            "input_placeholder": "Say a sentence, or type one here.",
            "submit_button_idle": "Get feedback",
            "submit_button_loading": "Getting feedback...",
            "foreign_sentence_label": "Foreign sentence",
            "listen_button": "🔊 Listen",
            "pron_label": "Pronunciation",
            "done_message": "You’ve finished today’s practice. Well done!",
            "back_to_setup": "Change languages / sets",
            "retry_message": "Something went wrong. Please try again.",
            "empty_input": "Say or type a sentence first.",
            "turn_in_flight": "Your previous answer is still being checked.",
            "recognition_unsupported": "Speech recognition is not available here. Type your answer instead.",
        },
    },
    "fr": {
        "label": "Français",
        "tts_lang": "fr-FR",
        "script": "French (Latin alphabet)",
        "questions": [
            "Comment as-tu commencé ta journée aujourd'hui ?",
            "Qu'as-tu fait hier soir ?",
            "Que fais-tu d'habitude pendant les jours fériés ?",
        ],
        "ui": {
            "setup_title": "Parler une langue étrangère, en partant de ta langue maternelle",
            "setup_subtitle": "Choisis ta langue maternelle, la langue cible\net le nombre de séries que tu veux pratiquer aujourd’hui.",
            "native_label": "Langue maternelle",
            "target_label": "Langue cible",
            "sets_question": "Combien de séries veux-tu pratiquer aujourd’hui ?",
            "set_info": "1 série ≈ 1 question + réponse + phrase en langue étrangère à pratiquer",
            "start_practice": "Commencer la pratique",
            "practice_question_title": "Question",
            "native_answer_prompt": "Répondez librement dans votre langue maternelle",
            "target_answer_prompt": "Essaie de répondre dans la langue cible",
            "speak_button_idle": "🎤 Parler pour remplir",
            "speak_button_active": "Arrêter de parler",
            "type_instead_hint": "Ou écris directement dans la zone ci-dessous.",
            "input_placeholder": "Dis une phrase, ou écris-en une ici.",
            "submit_button_idle": "Obtenir un retour",
            "submit_button_loading": "Préparation du retour...",
            "foreign_sentence_label": "Phrase en langue étrangère",
            "listen_button": "🔊 Écouter",
            "pron_label": "Prononciation",
            "done_message": "Tu as terminé ta pratique pour aujourd’hui. Bravo !",
            "back_to_setup": "Changer les langues / séries",
            "retry_message": "Un problème est survenu. Réessaie.",
            "empty_input": "Dis ou écris d’abord une phrase.",
            "turn_in_flight": "Ta réponse précédente est encore en cours de vérification.",
            "recognition_unsupported": "La reconnaissance vocale n’est pas disponible. Écris ta réponse.",
        },
    },
    "es": {
        "label": "Español",
        "tts_lang": "es-ES",
        "script": "Spanish (Latin alphabet)",
        "questions": [
            "¿Cómo empezaste tu día hoy?",
            "¿Qué hiciste anoche?",
            "¿Qué sueles hacer durante los días festivos?",
        ],
        "ui": {
            "setup_title": "Habla un idioma extranjero, empezando por tu lengua materna",
            "setup_subtitle": "Elige tu lengua materna y el idioma meta,\ny cuántas series quieres practicar hoy.",
            "native_label": "Lengua materna",
            "target_label": "Idioma meta",
            "sets_question": "¿Cuántas series quieres practicar hoy?",
            "set_info": "1 serie ≈ 1 pregunta + respuesta + práctica de la frase en idioma extranjero",
            "start_practice": "Empezar la práctica",
            "practice_question_title": "Pregunta",
            "native_answer_prompt": "Responde cómodamente en tu lengua materna",
            "target_answer_prompt": "Intenta responder en el idioma meta",
            "speak_button_idle": "🎤 Habla para rellenar",
            "speak_button_active": "Dejar de hablar",
            "type_instead_hint": "O escribe directamente en el cuadro de abajo.",
            "input_placeholder": "Di una frase o escríbela aquí.",
            "submit_button_idle": "Recibir comentarios",
            "submit_button_loading": "Preparando comentarios...",
            "foreign_sentence_label": "Frase en idioma extranjero",
            "listen_button": "🔊 Escuchar",
            "pron_label": "Pronunciación",
            "done_message": "Has terminado la práctica de hoy. ¡Buen trabajo!",
            "back_to_setup": "Cambiar lenguas / series",
            "retry_message": "Algo salió mal. Inténtalo de nuevo.",
            "empty_input": "Primero di o escribe una frase.",
            "turn_in_flight": "Tu respuesta anterior todavía se está revisando.",
            "recognition_unsupported": "El reconocimiento de voz no está disponible. Escribe tu respuesta.",
        },
    },
    "ru": {
        "label": "Русский",
        "tts_lang": "ru-RU",
        "script": "Russian (Cyrillic alphabet)",
        "questions": [
            "Как ты начал(а) свой день сегодня?",
            "Что ты делал(а) вчера вечером?",
            "Что ты обычно делаешь в выходные или праздники?",
        ],
        "ui": {
            "setup_title": "Говори на иностранном языке, начиная с родного",
            "setup_subtitle": "Выбери родной и целевой язык\nи количество сетов для сегодняшней практики.",
            "native_label": "Родной язык",
            "target_label": "Целевой язык",
            "sets_question": "Сколько сетов ты хочешь потренировать сегодня?",
            "set_info": "1 сет ≈ 1 вопрос + ответ + тренировка фразы на иностранном языке",
            "start_practice": "Начать тренировку",
            "practice_question_title": "Вопрос",
            "native_answer_prompt": "Отвечайте свободно на своём родном языке",
            "target_answer_prompt": "Попробуй ответить на целевом языке",
            "speak_button_idle": "🎤 Говори, чтобы заполнить",
            "speak_button_active": "Закончить говорить",
            "type_instead_hint": "Или напиши прямо в поле ниже.",
            "input_placeholder": "Скажи фразу или напиши её здесь.",
            "submit_button_idle": "Получить отзыв",
            "submit_button_loading": "Готовлю отзыв...",
            "foreign_sentence_label": "Фраза на иностранном языке",
            "listen_button": "🔊 Прослушать",
            "pron_label": "Произношение",
            "done_message": "Ты завершил(а) тренировку на сегодня. Отличная работа!",
            "back_to_setup": "Изменить языки / количество сетов",
            "retry_message": "Что-то пошло не так. Попробуй ещё раз.",
            "empty_input": "Сначала скажи или напиши предложение.",
            "turn_in_flight": "Предыдущий ответ ещё проверяется.",
            "recognition_unsupported": "Распознавание речи недоступно. Напиши ответ в поле.",
        },
    },
}

SUPPORTED: List[str] = list(LANGUAGES)


def lookup(code: str | None) -> Dict:
    return LANGUAGES.get(code or "", LANGUAGES[FALLBACK])


def is_supported(code: str | None) -> bool:
    return code in LANGUAGES


def tts_lang(code: str | None) -> str:
    return lookup(code)["tts_lang"]


def ui_texts(code: str | None) -> Dict[str, str]:
    # fill gaps key by key so a partially translated entry still renders
    base = dict(LANGUAGES[FALLBACK]["ui"])
    base.update(lookup(code)["ui"])
    return base


def question(code: str | None, index: int = 0) -> str:
    qs = lookup(code)["questions"]
    return qs[index % len(qs)]


def other_than(code: str) -> str:
    """First supported code different from ``code``."""
    return next(c for c in SUPPORTED if c != code)
