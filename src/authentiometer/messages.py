"""User-facing strings (errors, progress, synthesized limitations) in each UI language."""

from typing import Dict
from .schemas.request import Language

MESSAGES: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "missing_key_gemini": "Missing Gemini API key.",
        "missing_key_groq": "Missing Groq API key.",
        "url_required": "YouTube URL required.",
        "url_invalid": "Invalid YouTube URL.",
        "model_required_gemini": "Select a Gemini model.",
        "model_required_groq": "Select a Groq model.",
        "text_required": "In Groq mode, please paste some text (transcript/summary).",
        "text_too_long": "Text too long ({actual} chars). Please paste a shorter summary (<= {allowed}).",
        "text_file_unreadable": "Cannot read text file {path} ({reason}).",
        "content_unavailable": (
            "Unable to extract content (too long, restricted, or partial access). "
            "Try another video or use Groq + text mode."
        ),
        "note_partial_coverage": "Partial text coverage of the video.",
        "note_condensed": "Text was condensed before analysis (possible detail loss).",
        "status_preparing": "Preparing…",
        "status_extracting": "Step 1/2: extracting text…",
        "status_condensing": "Long text → condensing…",
        "status_analyzing_gemini": "Step 2/2: Authentiometer analysis…",
        "status_analyzing_groq": "Authentiometer analysis (Groq)…",
        "status_loading_models": "Loading {provider} models…",
        "status_done": "Done ✅",
        "no_models": "No {provider} model available.",
    },
    Language.FR: {
        "missing_key_gemini": "Clé Gemini manquante.",
        "missing_key_groq": "Clé Groq manquante.",
        "url_required": "URL YouTube requise.",
        "url_invalid": "URL YouTube invalide.",
        "model_required_gemini": "Choisis un modèle Gemini.",
        "model_required_groq": "Choisis un modèle Groq.",
        "text_required": "En mode Groq, colle un texte (transcription/résumé).",
        "text_too_long": "Texte trop long ({actual} caractères). Colle un résumé plus court (<= {allowed}).",
        "text_file_unreadable": "Impossible de lire le fichier texte {path} ({reason}).",
        "content_unavailable": (
            "Impossible d’extraire le contenu (vidéo trop longue, restrictions, ou accès partiel). "
            "Essaie une autre vidéo ou utilise le mode Groq + texte."
        ),
        "note_partial_coverage": "Texte partiel (couverture partielle de la vidéo).",
        "note_condensed": "Texte condensé avant analyse (perte de détails possible).",
        "status_preparing": "Préparation…",
        "status_extracting": "Étape 1/2 : extraction du texte…",
        "status_condensing": "Texte long → condensation…",
        "status_analyzing_gemini": "Étape 2/2 : analyse Authentiometer…",
        "status_analyzing_groq": "Analyse Authentiometer (Groq)…",
        "status_loading_models": "Chargement modèles {provider}…",
        "status_done": "Terminé ✅",
        "no_models": "Aucun modèle {provider}.",
    },
}


def msg(language: Language, key: str, **kwargs) -> str:
    text = MESSAGES[Language(language)][key]
    return text.format(**kwargs) if kwargs else text
