from __future__ import annotations

from types import SimpleNamespace

import pytest

from jobpilot import letters
from jobpilot.letters import (
    CourseInfo,
    LetterValidationError,
    ParticipantData,
    UserContext,
    build_cover_letter_prompt,
    build_suitability_prompt,
    default_generator,
    generate_cover_letter,
    generate_suitability_letter,
    validate_cover_letter,
)


class FakeGenerator:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate(self, prompt, system_instruction):
        self.prompts.append((prompt, system_instruction))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def participant():
    return ParticipantData(name="Max Muster", address="Hauptstr. 1, 10115 Berlin", background="Pflegefachkraft")


@pytest.fixture
def course():
    return CourseInfo(title="IT-Administrator im Gesundheitswesen", modules=["Linux", "Netzwerke"], degree="IHK")


def test_cover_letter_prompt_carries_job_and_user(make_job):
    job = make_job(requirements=["Linux", "Bash"], description="Betreuung der Server")
    prompt = build_cover_letter_prompt(job, UserContext(skills="Linux"))

    assert job.title in prompt
    assert "Linux, Bash" in prompt
    assert "Betreuung der Server" in prompt
    assert "Keine Angabe" in prompt


def test_cover_letter_is_returned_when_title_is_on_top(make_job):
    job = make_job()
    letter = f"Bewerbung als {job.title}\n\nSehr geehrte Damen und Herren, ..."
    generator = FakeGenerator(letter)

    assert generate_cover_letter(job, UserContext(), generator) == letter
    assert len(generator.prompts) == 1


def test_cover_letter_without_title_is_an_error_string(make_job):
    job = make_job()
    generator = FakeGenerator("Sehr geehrte Damen und Herren,\n" + "bla " * 200)

    out = generate_cover_letter(job, UserContext(), generator)

    assert out.startswith("Fehler bei der Generierung des Motivationsschreibens:")
    assert job.title in out


def test_provider_errors_never_raise(make_job, participant, course):
    boom = RuntimeError("quota exceeded")

    cover = generate_cover_letter(make_job(), UserContext(), FakeGenerator(error=boom))
    suitability = generate_suitability_letter(participant, [], course, FakeGenerator(error=boom))

    assert cover == "Fehler bei der Generierung des Motivationsschreibens: quota exceeded"
    assert suitability == "Fehler bei der Generierung des Schreibens: quota exceeded"


def test_empty_model_output_is_an_error(participant, course):
    out = generate_suitability_letter(participant, [], course, FakeGenerator("   "))
    assert out.startswith("Fehler bei der Generierung des Schreibens:")


def test_validate_title_anywhere_in_opening(caplog):
    letter = "Betreff: Bewerbung\n\nHiermit bewerbe ich mich als it systemadministrator (m/w/d)."
    validate_cover_letter(letter, "IT Systemadministrator (m/w/d)")
    assert "subject line" in caplog.text

    with pytest.raises(LetterValidationError):
        validate_cover_letter("x" * 500 + "IT Systemadministrator", "IT Systemadministrator")


def test_suitability_prompt_lists_jobs_or_falls_back(make_job, participant, course):
    with_jobs = build_suitability_prompt(participant, [make_job()], course)
    without = build_suitability_prompt(participant, [], course)

    assert "https://arbeitnow.com/jobs/1" in with_jobs
    assert "Linux, Netzwerke" in with_jobs
    assert "hohe Nachfrage" in without
    assert "Max Muster" in without


def test_suitability_letter_passes_through(make_job, participant, course):
    generator = FakeGenerator("Antrag auf Förderung ...")

    assert generate_suitability_letter(participant, [make_job()], course, generator) == "Antrag auf Förderung ..."
    prompt, system = generator.prompts[0]
    assert "Agentur für Arbeit" in system
    assert course.title in prompt


def test_default_generator_needs_a_key():
    assert default_generator(None) is None
    assert default_generator("") is None


def test_gemini_generator_sends_system_instruction(monkeypatch):
    calls = {}

    class FakeModels:
        def generate_content(self, model, contents, config):
            calls.update(model=model, contents=contents, system=config.system_instruction)
            return SimpleNamespace(text="Bewerbung als Admin")

    class FakeClient:
        def __init__(self, api_key):
            calls["api_key"] = api_key
            self.models = FakeModels()

    monkeypatch.setattr(letters.genai, "Client", FakeClient)

    generator = default_generator("secret", "gemini-test")

    assert generator.generate("Prompt", "System") == "Bewerbung als Admin"
    assert calls == {"api_key": "secret", "model": "gemini-test", "contents": "Prompt", "system": "System"}
