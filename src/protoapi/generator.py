from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .bindings import ServiceUnit, collect_service
from .descriptors import FileDescriptor
from .generation import plan_outputs, render
from .options import GenerationConfig
from .sync import DirectOutput, StagedOutput, write_file

logger = logging.getLogger(__name__)


def collect_units(files: Iterable[FileDescriptor]) -> list[ServiceUnit]:
    """Service units of every file marked for generation, in declaration order."""
    units: list[ServiceUnit] = []
    for file in files:
        if not file.generate:
            continue
        for service in file.services:
            unit = collect_service(service)
            if unit is not None:
                units.append(unit)
    return units


def generate(files: Iterable[FileDescriptor], config: GenerationConfig) -> list[Path]:
    """Render every bound service into every configured target directory.

    Target directories are emptied before anything is written. Targets whose
    directory does not exist are skipped.

    Returns:
        The written file paths, each under its directory as configured
    """
    directories = config.target_directories()
    output = StagedOutput(directories) if config.atomic else DirectOutput(directories)
    written: list[Path] = []
    with output:
        for unit in collect_units(files):
            for job in plan_outputs(config, unit):
                directory = output.target(job.directory)
                if directory is None:
                    logger.debug("Output directory %s does not exist; skipping %s", job.directory, unit.name)
                    continue
                rendered = render(job, unit)
                write_file(directory, rendered.filename, rendered.code)
                path = Path(job.directory) / rendered.filename
                logger.info("Wrote %s", path)
                written.append(path)
    return written
