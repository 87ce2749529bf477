"""
Prompt templates for cover letter generation and match analysis.

Builders are pure: identical inputs always give identical prompts, which
the strict-prompt retry relies on.
"""

from dataclasses import dataclass

from shared.models import CandidateSnapshot, JobSnapshot, PromptPair

COVER_LETTER_CV_CHARS = 500
COVER_LETTER_DESCRIPTION_CHARS = 300
ANALYSIS_CV_CHARS = 1500
ANALYSIS_DESCRIPTION_CHARS = 500


@dataclass(frozen=True)
class LocaleTemplates:
    """Language-specific prompt text and fallbacks."""

    cover_letter_system: str
    cover_letter_user: str
    analysis_system: str
    analysis_user: str
    strict_directive: str

    unknown_candidate: str
    unknown_company: str
    no_bio: str
    no_skills: str
    no_cv: str
    no_description: str
    no_contract_type: str

    # Analysis prompt wording differs from the cover letter one
    analysis_unknown_candidate: str
    analysis_no_cv: str
    analysis_no_description: str


FRENCH = LocaleTemplates(
    cover_letter_system=(
        "Tu es un expert en recrutement et rédaction professionnelle. "
        "Ta tâche est de rédiger des lettres de motivation convaincantes, "
        "professionnelles et concises (max {max_words} mots). "
        "Ne pars pas dans le blabla inutile. Rédige en français. "
        "Réponds uniquement avec la lettre de motivation, sans introduction ni commentaire."
    ),
    cover_letter_user="""Rédige une lettre de motivation pour le poste de {title} chez {company}.

Voici le profil du candidat :
- Nom : {name}
- Bio : {bio}
- Compétences clés : {skills}
- Extrait du CV : {cv}

L'offre requiert : {description}""",
    analysis_system="""Tu es une API d'analyse de recrutement. Tu ne réponds JAMAIS en dehors du format JSON.
Ta tâche : Analyser la correspondance entre un candidat et une offre d'emploi en te basant sur son CV et son profil.
Retourne UNIQUEMENT un objet JSON valide sans markdown (pas de ```json).
Format attendu : { "score": number (0-100), "justification": "string (phrase courte expliquant le score)" }""",
    analysis_user="""PROFIL DU CANDIDAT :
- Nom : {name}
- Bio : {bio}
- Contenu du CV : {cv}

OFFRE D'EMPLOI :
- Titre : {title}
- Description : {description}
- Compétences requises : {skills}
- Type de contrat : {contract_type}

Analyse la compatibilité entre le profil/CV du candidat et les exigences de l'offre. Donne un score de 0 à 100 et une justification courte.""",
    strict_directive=(
        "IMPORTANT: Réponds UNIQUEMENT avec ce format JSON exact, rien d'autre:\n"
        '{"score": 75, "justification": "Explication courte"}'
    ),
    unknown_candidate="Le candidat",
    unknown_company="l'entreprise",
    no_bio="Non renseignée",
    no_skills="Non spécifiées",
    no_cv="Non disponible",
    no_description="Non spécifié",
    no_contract_type="Non spécifié",
    analysis_unknown_candidate="Candidat",
    analysis_no_cv="CV non disponible",
    analysis_no_description="Non spécifiée",
)

ENGLISH = LocaleTemplates(
    cover_letter_system=(
        "You are a recruitment and professional writing expert. "
        "Your task is to write convincing, professional and concise cover letters "
        "(max {max_words} words). Skip filler. Write in English. "
        "Answer only with the cover letter, without introduction or commentary."
    ),
    cover_letter_user="""Write a cover letter for the {title} position at {company}.

Candidate profile:
- Name: {name}
- Bio: {bio}
- Key skills: {skills}
- CV excerpt: {cv}

The job requires: {description}""",
    analysis_system="""You are a recruitment analysis API. You NEVER answer outside of JSON.
Your task: analyse how well a candidate matches a job offer based on their CV and profile.
Return ONLY a valid JSON object without markdown (no ```json).
Expected format: { "score": number (0-100), "justification": "string (short sentence explaining the score)" }""",
    analysis_user="""CANDIDATE PROFILE:
- Name: {name}
- Bio: {bio}
- CV content: {cv}

JOB OFFER:
- Title: {title}
- Description: {description}
- Required skills: {skills}
- Contract type: {contract_type}

Analyse the fit between the candidate's profile/CV and the job requirements. Give a score from 0 to 100 and a short justification.""",
    strict_directive=(
        "IMPORTANT: Answer ONLY with this exact JSON format, nothing else:\n"
        '{"score": 75, "justification": "Short explanation"}'
    ),
    unknown_candidate="The candidate",
    unknown_company="the company",
    no_bio="Not provided",
    no_skills="Not specified",
    no_cv="Not available",
    no_description="Not specified",
    no_contract_type="Not specified",
    analysis_unknown_candidate="Candidate",
    analysis_no_cv="CV not available",
    analysis_no_description="Not specified",
)

LOCALES: dict[str, LocaleTemplates] = {
    "fr": FRENCH,
    "en": ENGLISH,
}


class PromptBuilder:
    """Builds prompt pairs for both AI tasks in one locale."""

    def __init__(self, locale: str = "fr", max_words: int = 250):
        if locale not in LOCALES:
            raise ValueError(
                f"Unsupported locale '{locale}', expected one of: {', '.join(sorted(LOCALES))}"
            )
        self.locale = locale
        self.max_words = max_words
        self.templates = LOCALES[locale]

    def _skills(self, job: JobSnapshot) -> str:
        return ", ".join(job.skill_names) or self.templates.no_skills

    def cover_letter(self, candidate: CandidateSnapshot, job: JobSnapshot) -> PromptPair:
        t = self.templates
        cv = (
            candidate.cv_text[:COVER_LETTER_CV_CHARS] + "..."
            if candidate.cv_text
            else t.no_cv
        )
        description = (
            job.description[:COVER_LETTER_DESCRIPTION_CHARS]
            if job.description
            else t.no_description
        )
        company = job.company.name if job.company and job.company.name else t.unknown_company

        user_prompt = t.cover_letter_user.format(
            title=job.title,
            company=company,
            name=candidate.full_name or t.unknown_candidate,
            bio=candidate.bio or t.no_bio,
            skills=self._skills(job),
            cv=cv,
            description=description,
        )
        return PromptPair(
            system_prompt=t.cover_letter_system.format(max_words=self.max_words),
            user_prompt=user_prompt,
        )

    def match_analysis(self, candidate: CandidateSnapshot, job: JobSnapshot) -> PromptPair:
        t = self.templates
        cv = candidate.cv_text[:ANALYSIS_CV_CHARS] if candidate.cv_text else t.analysis_no_cv
        description = (
            job.description[:ANALYSIS_DESCRIPTION_CHARS]
            if job.description
            else t.analysis_no_description
        )

        user_prompt = t.analysis_user.format(
            name=candidate.full_name or t.analysis_unknown_candidate,
            bio=candidate.bio or t.no_bio,
            cv=cv,
            title=job.title,
            description=description,
            skills=self._skills(job),
            contract_type=job.contract_type or t.no_contract_type,
        )
        return PromptPair(system_prompt=t.analysis_system, user_prompt=user_prompt)

    def strict_match_analysis(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> PromptPair:
        """Analysis prompt with an explicit format directive and example up front."""
        base = self.match_analysis(candidate, job)
        return PromptPair(
            system_prompt=base.system_prompt,
            user_prompt=f"{self.templates.strict_directive}\n\n{base.user_prompt}",
        )
