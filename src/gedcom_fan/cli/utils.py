from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import typer
from rich.console import Console

from gedcom_fan.config import get_config
from gedcom_fan.core.context import PipelineContext
from gedcom_fan.core.exceptions import PipelineError
from gedcom_fan.core.pipeline import Pipeline
from gedcom_fan.logging import get_logger

console = Console()
err_console = Console(stderr=True)


def load_gedcom(path: Path, *, verbose: bool = False) -> Tuple[Pipeline, PipelineContext]:
    """
    Decode + extract runner shared by all commands.

    Pipeline failures are reported on stderr and end the command with
    exit code 1.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    cfg = get_config()
    ctx = PipelineContext(
        config=cfg,
        logger=get_logger("cli"),
        input_path=str(path),
        debug=bool(cfg.debug),
    )
    pipeline = Pipeline(ctx)

    t0 = time.perf_counter()
    try:
        pipeline.run()
    except PipelineError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded GEDCOM in {elapsed:.2f}s")

    return pipeline, ctx


def write_json(
    data: Optional[Dict[str, Any]],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
