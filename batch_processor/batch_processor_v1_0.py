import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Tuple

from tqdm import tqdm

from image_codec.image_codec_v1_0 import DecodeError
from sprite_pipeline.sprite_pipeline_v1_0 import ValidationError, process_file, validate_options


class BatchSummary:
    """Outcome counts of one batch run."""

    def __init__(self):
        self.processed = 0
        self.skipped = 0
        self.ignored = 0
        self.failed = 0
        self.bytes_written = 0

    def __str__(self):
        return (f"{self.processed} processed, {self.skipped} skipped, "
                f"{self.ignored} ignored, {self.failed} failed")


class SpriteBatchProcessor:
    """
    Normalizes every entry of a directory into a mirrored output directory.

    Output collisions are checked on the calling thread before anything is
    submitted, then each entry runs through the file pipeline on a bounded
    thread pool. A failing entry is logged and never affects its siblings.
    """

    def __init__(
        self,
        input_dir: str,
        output_dir: str,
        force: bool = False,
        downsize: bool = False,
        max_size: Optional[int] = None,
        max_workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
        show_progress: bool = False
    ):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.force = force
        self.downsize = downsize
        self.max_size = max_size
        self.max_workers = max_workers or os.cpu_count() or 1
        self.logger = logger or logging.getLogger(__name__)
        self.show_progress = show_progress

    def process(self) -> BatchSummary:
        summary = BatchSummary()

        self._validate()
        self._ensure_output_dir()
        jobs = self._enumerate(summary)

        if not jobs:
            self.logger.info(f"Nothing to process in {self.input_dir}")
            return summary

        self.logger.info(f"Processing {len(jobs)} entries with {self.max_workers} workers...")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(process_file, input_path, output_path,
                                self.downsize, self.max_size, self.logger): input_path
                for input_path, output_path in jobs
            }
            completed = as_completed(futures)
            if self.show_progress:
                completed = tqdm(completed, total=len(futures), desc="Normalizing sprites", unit="img")

            for future in completed:
                self._handle_result(futures[future], future, summary)

        self.logger.info(f"Batch complete: {summary}")
        return summary

    def _validate(self):
        validate_options(self.input_dir, self.downsize, self.max_size, self.logger)
        if not self.input_dir.is_dir():
            raise ValidationError(f"Input is not a directory: {self.input_dir}")
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise ValidationError(f"Output must be a directory when the input is a directory: {self.output_dir}")

    def _ensure_output_dir(self):
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Could not create output directory {self.output_dir}: {e}") from e

    def _enumerate(self, summary: BatchSummary) -> List[Tuple[Path, Path]]:
        """
        List input entries and drop those whose output already exists.
        Runs before any job is submitted so that --force is honoured
        without racing the workers.
        """
        try:
            entries = sorted(self.input_dir.iterdir())
        except OSError as e:
            raise ValidationError(f"Could not list input directory {self.input_dir}: {e}") from e

        jobs = []
        for entry in entries:
            output_path = self.output_dir / entry.name
            try:
                entry.stat()
                output_is_file = output_path.is_file()
            except OSError as e:
                self.logger.error(f"Could not read metadata for {entry}: {e}")
                summary.skipped += 1
                continue

            if output_is_file and not self.force:
                self.logger.info(f"Skipping {entry.name}: {output_path} already exists (use --force to overwrite)")
                summary.skipped += 1
                continue

            jobs.append((entry, output_path))

        return jobs

    def _handle_result(self, input_path: Path, future, summary: BatchSummary):
        try:
            summary.bytes_written += future.result()
            summary.processed += 1
        except DecodeError as e:
            if e.kind == DecodeError.NOT_AN_IMAGE:
                self.logger.debug(f"Ignoring {input_path.name}: {e}")
                summary.ignored += 1
            else:
                self.logger.error(f"Failed to read {input_path.name}: {e}")
                summary.failed += 1
        except Exception as e:
            self.logger.error(f"Failed to process {input_path.name}: {e}")
            summary.failed += 1


def run_batch_processor(input_dir, output_dir, force=False, downsize=False, max_size=None,
                        max_workers=None, logger: Optional[logging.Logger] = None,
                        show_progress=False) -> BatchSummary:
    processor = SpriteBatchProcessor(
        input_dir=input_dir,
        output_dir=output_dir,
        force=force,
        downsize=downsize,
        max_size=max_size,
        max_workers=max_workers,
        logger=logger,
        show_progress=show_progress,
    )
    return processor.process()
