# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from throughput_records.logging.init import reset_logging
from throughput_records.models.record import Record

from sample_rows import HEADER, ROW_1, ROW_2, ROW_3


@pytest.fixture(autouse=True)
def _reset_logging_state():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv_text() -> str:
    return "\n".join([HEADER, ROW_1, ROW_2, ROW_3]) + "\n"


@pytest.fixture()
def sample_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "throughput.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """dataset_path: ./data/throughput.csv
output_path: ./data/updated_dataset.csv
list_style: full
color: never
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "editor.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_record() -> Callable[..., Record]:
    def _make(**overrides: object) -> Record:
        values: dict[str, object] = dict(
            date="2024-01-01",
            month=1,
            year=2024,
            company="Company A",
            pipeline="Pipeline X",
            key_point="Location Y",
            latitude=48.123,
            longitude=-97.456,
            direction_of_flow="south",
            trade_type="export",
            product="oil",
            throughput=100.0,
            committed_volumes=50.0,
            uncommitted_volumes=50.0,
            nameplate_capacity=120.0,
            available_capacity=100.0,
            reason_for_variance="No variance",
        )
        values.update(overrides)
        return Record(**values)  # type: ignore[arg-type]
    return _make


@pytest.fixture()
def scripted_prompt() -> Callable[[Iterable[str]], Callable[[str], str]]:
    """Build a prompt_line callable answering from a list; EOFError when exhausted."""
    def _build(answers: Iterable[str]) -> Callable[[str], str]:
        it = iter(answers)
        prompts: list[str] = []

        def _prompt(message: str) -> str:
            prompts.append(message)
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        _prompt.prompts = prompts  # type: ignore[attr-defined]
        return _prompt
    return _build
