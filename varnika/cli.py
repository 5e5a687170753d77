"""Command-line interface for the transliteration engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Config
from .engine import Transliterator, init_from_lang
from .errors import ResourceNotFound, VarnikaError
from .pipeline import BatchPipeline
from .resources import ensure_learnings_store, find_learnings_path, find_vst_path
from .stores import LearnedWordStore, PatternStore
from .symbol_table import build_symbol_table, load_scheme


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    common.add_argument(
        "--lang",
        "-l",
        help="Language code (default: from config, 'ml')",
    )
    common.add_argument(
        "--vst",
        type=Path,
        help="Symbol table file, instead of looking one up by language",
    )
    common.add_argument(
        "--learnings",
        type=Path,
        help="Learnings file, instead of the per-user default",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser = argparse.ArgumentParser(
        description="Transliterate words typed in a Latin scheme into a native script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Suggestions for a word
  varnika transliterate --lang ml malayalam

  # Using explicit files
  varnika transliterate --vst schemes/ml.vst --learnings ml.learnings namaskaram

  # Transliterate a word list
  varnika batch --input words.txt --output output/words.csv

  # Teach the engine
  varnika learn --lang ml മലയാളം
  varnika train --lang ml malayalam മലയാളം

  # Compile a scheme into a symbol table
  varnika build-vst --scheme schemes/ml.yaml --output schemes/ml.vst
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    translit = subparsers.add_parser(
        "transliterate", parents=[common], help="Show ranked suggestions for words"
    )
    translit.add_argument("words", nargs="+", help="Input words")
    translit.add_argument("--json", action="store_true", help="Print results as JSON")

    batch = subparsers.add_parser("batch", parents=[common], help="Transliterate a word list")
    batch.add_argument("--input", type=Path, required=True, help=".txt or .csv input file")
    batch.add_argument("--output", type=Path, required=True, help="Output file path")
    batch.add_argument(
        "--format",
        choices=["csv", "parquet", "json"],
        help="Output format (default: csv)",
    )

    learn = subparsers.add_parser("learn", parents=[common], help="Learn native-script words")
    learn.add_argument("words", nargs="+", help="Words in the target script")

    train = subparsers.add_parser("train", parents=[common], help="Map an input pattern to a word")
    train.add_argument("pattern", help="Input text")
    train.add_argument("word", help="Word in the target script")

    build = subparsers.add_parser(
        "build-vst", parents=[common], help="Compile a YAML scheme into a symbol table"
    )
    build.add_argument("--scheme", type=Path, required=True, help="YAML scheme file")
    build.add_argument("--output", type=Path, required=True, help="Output .vst path")

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration from file and apply command-line overrides."""
    config = Config.from_yaml(args.config) if args.config else Config()
    if args.lang:
        config.language = args.lang
    if args.verbose:
        config.engine.debug = True
    if getattr(args, "format", None):
        config.output.format = args.format
    return config


def learnings_path_for(args: argparse.Namespace, config: Config) -> Path:
    """Learnings file chosen on the command line, or the per-user default."""
    path = args.learnings or find_learnings_path(config.language, config.stores.learnings_dir)
    ensure_learnings_store(path)
    return path


def open_engine(args: argparse.Namespace, config: Config) -> Transliterator:
    """Open the engine from explicit files or by language code."""
    if not args.vst and not args.learnings:
        return init_from_lang(config.language, config)

    vst_path = args.vst or find_vst_path(config.language, config.stores.vst_dirs)
    if vst_path is None:
        raise ResourceNotFound(f"Couldn't find symbol table for language {config.language!r}")

    return Transliterator.open(
        vst_path,
        learnings_path_for(args, config),
        more_limit=config.stores.more_limit,
        pattern_limit=config.stores.pattern_limit,
        max_workers=config.engine.max_workers,
        joiner_pattern=config.engine.joiner_pattern,
        debug=config.engine.debug,
    )


def run_transliterate(args: argparse.Namespace, config: Config) -> int:
    with open_engine(args, config) as engine:
        results = {word: engine.transliterate(word) for word in args.words}

    if args.json:
        print(json.dumps({w: r.to_dict() for w, r in results.items()}, ensure_ascii=False, indent=2))
        return 0

    top_n = config.output.top_n
    for word, result in results.items():
        print(word)
        print(f"  exact:      {' '.join(s.text for s in result.exact_match[:top_n])}")
        print(f"  candidates: {' '.join(s.text for s in result.candidates[:top_n])}")
        print(f"  greedy:     {' '.join(s.text for s in result.greedy_exact[:top_n])}")
    return 0


def run_batch(args: argparse.Namespace, config: Config) -> int:
    with open_engine(args, config) as engine:
        count = BatchPipeline(engine, config.output).run(args.input, args.output)

    print(f"\nTransliterated {count} words")
    print(f"Results saved to: {args.output}")
    return 0


def run_learn(args: argparse.Namespace, config: Config) -> int:
    with LearnedWordStore(learnings_path_for(args, config)) as store:
        for word in args.words:
            sug = store.learn(word)
            print(f"Learned {sug.text} (weight {sug.weight})")
    return 0


def run_train(args: argparse.Namespace, config: Config) -> int:
    with PatternStore(learnings_path_for(args, config)) as store:
        match = store.train(args.pattern, args.word)
    print(f"Trained {args.pattern} -> {match.suggestion.text}")
    return 0


def run_build_vst(args: argparse.Namespace, config: Config) -> int:
    metadata, rules = load_scheme(args.scheme)
    build_symbol_table(args.output, rules, metadata)
    print(f"Wrote {len(rules)} symbols to {args.output}")
    return 0


COMMANDS = {
    "transliterate": run_transliterate,
    "batch": run_batch,
    "learn": run_learn,
    "train": run_train,
    "build-vst": run_build_vst,
}


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args)
        return COMMANDS[args.command](args, config)

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except VarnikaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Command failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
