"""Letter generation on top of a generative text model.

The model is an opaque collaborator: anything can go wrong there (provider
error, empty text, a letter that ignores the job title). None of that is raised
to the caller; every failure comes back as a descriptive German error string.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from .models import Job

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
TITLE_CHECK_CHARS = 400

COVER_LETTER_SYSTEM = (
    "Du bist ein Experte für die Erstellung von überzeugenden, professionellen deutschen "
    "Motivationsschreiben. Deine Aufgabe ist es, die Jobanforderungen und die Daten des Bewerbers "
    "zu einer kohärenten und überzeugenden Geschichte zu verweben. Halte dich strikt an die "
    "vorgegebene Struktur und die Regeln im Prompt."
)

SUITABILITY_SYSTEM = (
    "Du bist ein Experte für das Verfassen von offiziellen Dokumenten für deutsche Behörden, "
    "insbesondere für die Agentur für Arbeit. Deine Aufgabe ist es, aus den gegebenen Informationen "
    "ein sachliches, strukturiertes und überzeugendes Eignungsfeststellungs- und Motivationsschreiben "
    "zu erstellen. Halte dich exakt an die vorgegebene Struktur und den sachlichen Ton."
)


class UserContext(BaseModel):
    skills: str = ""
    knowledge: str = ""
    background: str = ""


class ParticipantData(BaseModel):
    name: str
    birth_date: str = ""
    address: str = ""
    background: str = ""
    skills: str = ""
    motivation: str = ""
    funding_reason: str = ""
    preferences: str = ""


class CourseInfo(BaseModel):
    title: str
    duration: str = ""
    degree: str = ""
    goal: str = ""
    modules: List[str] = Field(default_factory=list)
    value: str = ""


class LetterValidationError(ValueError):
    """The generated letter does not satisfy the post-generation checks."""


class TextGenerator(Protocol):
    def generate(self, prompt: str, system_instruction: str) -> str: ...


class GeminiGenerator:
    """TextGenerator backed by the Google Gemini API."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model_name = model_name

    def generate(self, prompt: str, system_instruction: str) -> str:
        response = self._client.models.generate_content(
            model=self._model_name,
            contents=prompt,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        return response.text or ""


def build_cover_letter_prompt(job: Job, user: UserContext) -> str:
    requirements = ", ".join(job.requirements[:5])
    return f"""
Aufgabe: Erstelle ein überzeugendes und professionelles Motivationsschreiben in deutscher Sprache.
Struktur:
1.  **Betreff:** "Bewerbung als {job.title}"
2.  **Einleitung:** Nenne die exakte Position "{job.title}" und die Firma "{job.company}". Zeige sofortiges Interesse.
3.  **Hauptteil:** Gehe auf 2-3 Kernanforderungen aus der Stellenbeschreibung ein und verknüpfe jede direkt mit den Informationen des Bewerbers. Nutze "Vorwissen" und "Hintergrund" als Belege. Begründe die Motivation, besonders bei Quereinsteigern.
4.  **Schluss:** Formuliere einen klaren Call-to-Action (Einladung zum Gespräch) und schließe professionell ab.

**Regeln:**
- **Ton:** Selbstbewusst, professionell und prägnant.
- **Vermeiden:** Floskeln, Gehaltsvorstellungen, zu lange Sätze.

**Job Details:**
- Jobtitel: {job.title}
- Firma: {job.company}
- Standort: {job.location}
- Wichtige Anforderungen aus der Beschreibung: {requirements}

**Stellenbeschreibung (zur Analyse):**
---
{job.description}
---

**Informationen über den Bewerber:**
- **Skills / Stärken:** {user.skills or 'Keine Angabe'}
- **Vorwissen:** {user.knowledge or 'Keine Angabe'}
- **Hintergrund / Motivation:** {user.background or 'Keine Angabe'}
---
"""


def build_suitability_prompt(participant: ParticipantData, jobs: Sequence[Job], course: CourseInfo) -> str:
    if jobs:
        job_lines = "\n".join(f'- "{j.title}" bei {j.company} (Link: {j.url})' for j in jobs)
        jobs_text = f"Zur Untermauerung meiner Jobaussichten habe ich folgende passende Stellenanzeigen identifiziert:\n{job_lines}"
    else:
        jobs_text = (
            "Aktuelle Stellenrecherchen zeigen eine hohe Nachfrage für IT-Fachkräfte im Gesundheitswesen, "
            "was meine Jobperspektiven nach der Weiterbildung untermauert."
        )
    return f"""
Aufgabe: Erstelle ein sachliches Eignungsfeststellungs- und Motivationsschreiben aus der Ich-Perspektive des Teilnehmers für einen Bildungsgutschein.

1.  **Betreff:** "Antrag auf Förderung einer beruflichen Weiterbildung – Eignungsfeststellung und Motivation"
2.  **Einleitung:** Antrag auf Förderung der Weiterbildung '{course.title}'.
3.  **Ausgangslage:** {participant.background}
4.  **Fachliche Kompetenzen & Stärken:** {participant.skills}
5.  **Motivation & berufliches Ziel:** {participant.motivation}
6.  **Warum diese Weiterbildung:** Inhalte ({', '.join(course.modules)}), Abschluss ({course.degree}), Ziel ({course.goal}).
7.  **Begründung der Förderfähigkeit (§ 81 SGB III):** {participant.funding_reason}
8.  **Konkrete Jobperspektiven:** {jobs_text}
9.  **Schluss:** Beende das Schreiben mit "Mit freundlichen Grüßen,\n{participant.name}\n{participant.address}".

**Regeln:**
- Schreibe aus der Ich-Perspektive des Teilnehmers.
- Verwende ausschließlich die bereitgestellten Informationen. Erfinde keine Details.
- Formatiere den Text als zusammenhängenden Brief, nicht als Stichpunktliste.
"""


def validate_cover_letter(letter: str, title: str) -> None:
    """The exact job title has to appear near the top of the letter."""
    lowered = letter.lower()
    wanted = title.lower()
    if wanted not in lowered.split("\n", 1)[0]:
        logger.warning("Job title may be missing from the subject line.")
    if wanted not in lowered[:TITLE_CHECK_CHARS]:
        raise LetterValidationError(
            f'Validierung fehlgeschlagen: Der exakte Jobtitel "{title}" wurde nicht im '
            "Einleitungsabschnitt des Schreibens gefunden. Bitte versuchen Sie es erneut."
        )


def _generate(generator: TextGenerator, prompt: str, system: str) -> str:
    text = generator.generate(prompt, system)
    if not text or not text.strip():
        raise ValueError("Received an empty response from the AI.")
    return text


def generate_cover_letter(job: Job, user: UserContext, generator: TextGenerator) -> str:
    logger.info("Generating cover letter for: %s", job.title)
    try:
        letter = _generate(generator, build_cover_letter_prompt(job, user), COVER_LETTER_SYSTEM)
        validate_cover_letter(letter, job.title)
        return letter
    except Exception as exc:  # provider errors are opaque
        logger.error("Failed to generate cover letter: %s", exc)
        return f"Fehler bei der Generierung des Motivationsschreibens: {exc}"


def generate_suitability_letter(
    participant: ParticipantData,
    jobs: Sequence[Job],
    course: CourseInfo,
    generator: TextGenerator,
) -> str:
    logger.info("Generating suitability letter for %s, course %s", participant.name, course.title)
    try:
        return _generate(generator, build_suitability_prompt(participant, jobs, course), SUITABILITY_SYSTEM)
    except Exception as exc:  # provider errors are opaque
        logger.error("Failed to generate suitability letter: %s", exc)
        return f"Fehler bei der Generierung des Schreibens: {exc}"


def default_generator(api_key: Optional[str], model_name: str = DEFAULT_MODEL) -> Optional[GeminiGenerator]:
    if not api_key:
        logger.warning("GEMINI_API_KEY is not set; letter generation is disabled.")
        return None
    return GeminiGenerator(api_key, model_name)
