from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from sleuth.composer import SchemaComposer
from sleuth.language import LanguageProfile
from sleuth.provider.json_utils import extract_and_validate
from sleuth.types import ActionCapabilities


def test_decision_pipeline_rich_logging(tmp_path: Path):
    console = Console(record=True, width=120)
    console.rule("Decision contract smoke test")

    composer = SchemaComposer(LanguageProfile.resolved("de", "frustrated German-English tech slang"))
    model = composer.decision_schema(ActionCapabilities(search=True, answer=True, visit=True))
    raw = (
        "<think>need sources first</think>```json\n"
        '{"action": "search", "searchRequests": ["pytorch loss nan"], "think": "Erst mal suchen."}\n'
        "```"
    )
    decision, warnings = extract_and_validate(raw, model)
    console.log("parsed_decision", decision.model_dump(exclude_none=True), warnings)

    table = Table(title="Decision schema", expand=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Description", overflow="fold")
    for name, field in model.model_fields.items():
        table.add_row(name, field.description or "")
    console.print(table)

    log_path = tmp_path / "decision_pipeline.log"
    log_text = console.export_text(clear=False)
    log_path.write_text(log_text)

    assert "Decision contract smoke test" in log_text
    assert decision.active().searchRequests == ["pytorch loss nan"]
    assert "json_repaired_simple" in warnings
    assert model.available_actions() == ("search", "answer", "visit")
