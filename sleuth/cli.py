from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, List, Optional

import typer
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from sleuth.composer import SchemaComposer
from sleuth.config import Settings, load_settings, load_settings_file
from sleuth.constants import DEFAULT_POLICY
from sleuth.language import LanguageProfile
from sleuth.provider.registry import get_generator
from sleuth.types import ActionCapabilities, ContractConfigError

app = typer.Typer(help="Sleuth structured-output contracts")


@app.callback()
def _root_callback():
    """Sleuth CLI root."""
    pass


def _settings(settings_file: Optional[Path]) -> Settings:
    if settings_file is not None:
        return load_settings_file(settings_file)
    return load_settings()


def _composer(lang: Optional[str], style: Optional[str], settings: Settings) -> SchemaComposer:
    default = settings.default_language
    if lang or style:
        return SchemaComposer(LanguageProfile.resolved(lang or default.code, style or default.style))
    return SchemaComposer(LanguageProfile("", default=default))


def _capabilities(allow: Optional[List[str]]) -> ActionCapabilities:
    if not allow:
        return ActionCapabilities.all_enabled()
    names: List[str] = []
    for item in allow:
        names.extend(part for part in item.split(",") if part.strip())
    return ActionCapabilities.of(*[name.strip() for name in names])


def _build(step: str, eval_type: Optional[str], allow: Optional[List[str]], composer: SchemaComposer) -> type[BaseModel]:
    try:
        return composer.for_step(step, eval_type=eval_type, capabilities=_capabilities(allow))
    except ContractConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(2)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("schema")
def cmd_schema(
    step: str = typer.Argument(..., help="language | gap_check | code | error_analysis | query_rewrite | evaluator | decision"),
    eval_type: Optional[str] = typer.Option(None, "--eval-type", "-e", help="Evaluation type for the evaluator step"),
    allow: List[str] = typer.Option(None, "--allow", "-a", help="Enabled actions for the decision step (repeatable or comma-separated; default all)"),
    lang: Optional[str] = typer.Option(None, help="Resolved language code to localize with"),
    style: Optional[str] = typer.Option(None, help="Resolved language style to localize with"),
    settings_file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Settings YAML/JSON"),
):
    """Print the JSON Schema contract for a step."""
    settings = _settings(settings_file)
    model = _build(step, eval_type, allow, _composer(lang, style, settings))
    _echo_json(SchemaComposer.json_schema(model))


@app.command("validate")
def cmd_validate(
    step: str = typer.Argument(..., help="Step whose contract the payload must satisfy"),
    payload: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with the generated value"),
    eval_type: Optional[str] = typer.Option(None, "--eval-type", "-e"),
    allow: List[str] = typer.Option(None, "--allow", "-a"),
    settings_file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False),
):
    """Validate a generated value against a step's contract."""
    settings = _settings(settings_file)
    model = _build(step, eval_type, allow, _composer(None, None, settings))
    try:
        data = json.loads(payload.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"ERROR: {payload} is not valid JSON: {exc}", err=True)
        raise typer.Exit(1)
    try:
        value = model.model_validate(data)
    except ValidationError as exc:
        typer.echo(f"INVALID: {exc}", err=True)
        raise typer.Exit(1)
    _echo_json(value.model_dump(by_alias=True, exclude_none=True))


@app.command("detect")
def cmd_detect(
    question: str = typer.Argument(..., help="Question whose language and style to detect"),
    generator: Optional[str] = typer.Option(None, "--generator", "-g", help="Generator name (mock, openai); defaults to settings"),
    settings_file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False),
):
    """Resolve a language profile for a question and print the directive."""
    load_dotenv()
    settings = _settings(settings_file)
    name = generator or settings.generator
    if name.strip().lower().startswith(("openai", "gpt")) and not os.getenv("OPENAI_API_KEY"):
        typer.echo("ERROR: OPENAI_API_KEY not set (required for live detection)", err=True)
        raise typer.Exit(1)
    try:
        backend = get_generator(name, settings=settings)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(2)

    async def _run() -> LanguageProfile:
        profile = LanguageProfile.launch(question, backend, default=settings.default_language)
        await profile.resolve()
        return profile

    profile = asyncio.run(_run())
    _echo_json(
        {
            "langCode": profile.language_code,
            "langStyle": profile.language_style,
            "resolved": profile.is_resolved,
            "directive": profile.directive(),
        }
    )


@app.command("limits")
def cmd_limits():
    """Print the shared field and list bounds."""
    _echo_json(DEFAULT_POLICY.as_dict())


def main() -> None:  # pragma: no cover - console entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
