"""Batch transliteration of word lists."""

import json
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd
from tqdm import tqdm

from .config import OutputConfig
from .models import Suggestion, TransliterationResult

logger = logging.getLogger(__name__)


def _join_top(suggestions: List[Suggestion], top_n: int) -> str:
    return " ".join(s.text for s in suggestions[:top_n])


class BatchPipeline:
    """
    Transliterates every word of an input file and writes one row per word.

    Reads plain text (one word per line) or CSV with a ``word`` column and
    writes CSV, Parquet or JSON.
    """

    def __init__(self, transliterator, output: OutputConfig = None):
        """
        Initialize the pipeline.

        Args:
            transliterator: Engine used for every word.
            output: Output options (format, suggestions kept per list).
        """
        self.transliterator = transliterator
        self.output = output or OutputConfig()

    def read_words(self, input_path: Union[str, Path]) -> List[str]:
        """
        Read input words.

        Args:
            input_path: .txt or .csv file.

        Returns:
            Words in file order, blanks skipped.
        """
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")

        if input_path.suffix.lower() == ".csv":
            df = pd.read_csv(input_path, dtype=str, keep_default_na=False)
            if "word" not in df.columns:
                raise ValueError(f"Missing required column 'word' in {input_path}")
            words = df["word"].tolist()
        else:
            with open(input_path, "r", encoding="utf-8") as f:
                words = f.read().splitlines()

        words = [w.strip() for w in words if w and w.strip()]
        logger.info(f"Loaded {len(words)} words from {input_path}")
        return words

    def to_row(self, word: str, result: TransliterationResult) -> dict:
        """Flatten one result into an output row."""
        top_n = self.output.top_n
        best = result.exact_match or result.candidates
        return {
            "word": word,
            "top": best[0].text if best else "",
            "exact_match": _join_top(result.exact_match, top_n),
            "candidates": _join_top(result.candidates, top_n),
            "greedy": _join_top(result.greedy_exact, top_n),
        }

    def _write_output(self, rows: List[dict], output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(rows, columns=["word", "top", "exact_match", "candidates", "greedy"])

        logger.info(f"Writing {len(df)} rows to: {output_path}")

        if self.output.format == "csv":
            df.to_csv(output_path, index=False)
        elif self.output.format == "parquet":
            df.to_parquet(output_path, index=False)
        elif self.output.format == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(rows, f, ensure_ascii=False, indent=2)
        else:
            raise ValueError(f"Unsupported output format: {self.output.format}")

    def run(self, input_path: Union[str, Path], output_path: Union[str, Path]) -> int:
        """
        Execute the batch.

        Returns:
            Number of words transliterated.
        """
        words = self.read_words(input_path)

        rows = []
        for word in tqdm(words, desc="Transliterating"):
            result = self.transliterator.transliterate(word)
            rows.append(self.to_row(word, result))

        self._write_output(rows, Path(output_path))
        logger.info(f"Pipeline complete. Transliterated {len(rows)} words")
        return len(rows)
