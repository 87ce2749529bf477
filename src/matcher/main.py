"""
Matcher Service - Main entry point.
Generates cover letters and match analyses from YAML records.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from gateway import create_gateway
from shared.config import Settings, get_settings
from shared.errors import MatchingError

from .loader import load_candidate, load_job
from .service import create_matching_service


def setup_logging(settings: Optional[Settings] = None):
    """Configure loguru logging."""
    settings = settings or get_settings()
    logger.remove()

    if settings.log_format == "json":
        logger.add(
            sys.stderr,
            format="{message}",
            level=settings.log_level,
            serialize=True,
        )
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            level=settings.log_level,
        )


async def check_gateway(settings: Settings) -> bool:
    """Probe the configured text-generation service."""
    gateway = create_gateway(settings)
    try:
        return await gateway.is_available()
    finally:
        await gateway.close()


async def run_cover_letter(settings: Settings, candidate_path: Path, job_path: Path) -> str:
    candidate = load_candidate(candidate_path)
    job = load_job(job_path)

    async with create_matching_service(settings) as service:
        return await service.generate_cover_letter(candidate, job)


async def run_analysis(settings: Settings, candidate_path: Path, job_path: Path):
    candidate = load_candidate(candidate_path)
    job = load_job(job_path)

    async with create_matching_service(settings) as service:
        return await service.analyze_match(candidate, job)


def _fail(error: MatchingError):
    click.echo(f"Error [{error.code}]: {error.message}", err=True)
    sys.exit(1)


candidate_option = click.option(
    "--candidate",
    "-c",
    "candidate_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Candidate profile YAML file",
)
job_option = click.option(
    "--job",
    "-j",
    "job_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Job offer YAML file",
)


@click.group()
def cli():
    """CareerPath AI - cover letters and candidate-job match analysis."""
    setup_logging()


@cli.command()
def check():
    """Check that the text-generation service is reachable."""
    settings = get_settings()

    if settings.use_mock_ai:
        click.echo("Mock mode enabled, no AI service required")
        return

    target = settings.ollama_url if settings.ai_provider == "ollama" else settings.openai_base_url
    if asyncio.run(check_gateway(settings)):
        click.echo(f"AI service available ({settings.ai_provider}: {target})")
    else:
        click.echo(f"AI service unavailable ({settings.ai_provider}: {target})", err=True)
        sys.exit(1)


@cli.command("cover-letter")
@candidate_option
@job_option
def cover_letter(candidate_path: Path, job_path: Path):
    """Generate a cover letter for a candidate and job."""
    try:
        letter = asyncio.run(run_cover_letter(get_settings(), candidate_path, job_path))
    except MatchingError as e:
        _fail(e)
    click.echo(letter)


@cli.command()
@candidate_option
@job_option
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the application update payload as JSON",
)
def analyze(candidate_path: Path, job_path: Path, as_json: bool):
    """Score how well a candidate matches a job."""
    try:
        result = asyncio.run(run_analysis(get_settings(), candidate_path, job_path))
    except MatchingError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(result.to_application_update(), ensure_ascii=False))
    else:
        click.echo(f"Score: {result.score}/100")
        click.echo(f"Justification: {result.justification}")


if __name__ == "__main__":
    cli()
