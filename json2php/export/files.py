from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from json2php.config.schema import AppConfigRoot
from json2php.convert.service import ConversionResult


@dataclass
class ExportResult:
    output_dir: Path
    json_path: Path
    php_path: Path


def _render_php_file(array_literal: str, open_tag: bool) -> str:
    if not open_tag:
        return f"{array_literal}\n"
    return f"<?php\n\nreturn {array_literal};\n"


def export_outputs(
    result: ConversionResult,
    config: AppConfigRoot,
    output_dir: Path | None = None,
) -> ExportResult:
    target_dir = output_dir or config.app.output_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    json_path = target_dir / config.export.json_filename
    php_path = target_dir / config.export.php_filename
    json_path.write_text(f"{result.formatted}\n", encoding="utf-8")
    php_path.write_text(_render_php_file(result.array_literal, config.export.php_open_tag), encoding="utf-8")

    logger.info("Exported outputs to {}", target_dir)
    return ExportResult(output_dir=target_dir, json_path=json_path, php_path=php_path)
