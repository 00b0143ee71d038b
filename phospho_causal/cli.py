"""
CLI Module for phospho-causal
"""

import argparse
import sys

from .exceptions import ConfigurationError, GraphWriteError, ProteomicsFileError
from .utils.config import GRAPH_TYPES, RunConfig
from .utils.logging import get_logger, setup_logger


logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phospho-causal",
        description="Causal graphs from proteomic and phosphoproteomic data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run with a configuration file
    phospho-causal run --config config/config.yaml

    # Override files and search for conflicting relations
    phospho-causal run --config config/config.yaml \\
        --platform platform.txt --values values.txt --graph-type conflicting
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Generate result graphs")
    run_parser.add_argument("--config", help="Configuration file")
    run_parser.add_argument("--platform", dest="platform_file", help="Antibody annotation file")
    run_parser.add_argument("--values", dest="values_file", help="Measurement values file")
    run_parser.add_argument("--value-column", help="Value column of the values file")
    run_parser.add_argument("--network", dest="network_file", help="Signed network file")
    run_parser.add_argument("--site-effects", dest="site_effect_file", help="Site effect file")
    run_parser.add_argument("--resource-dir", help="Directory of resource files")
    run_parser.add_argument("--graph-type", choices=GRAPH_TYPES, help="Graph type")
    run_parser.add_argument("--value-threshold", type=float, help="Change threshold")
    run_parser.add_argument("--activity-threshold", type=float, help="Activity change threshold")
    run_parser.add_argument(
        "--site-proximity", dest="site_match_proximity_threshold", type=int,
        help="Residue distance tolerated when matching sites",
    )
    strict = run_parser.add_mutually_exclusive_group()
    strict.add_argument(
        "--strict-sites", dest="site_match_strict", action="store_true", default=None,
        help="Require site matches",
    )
    strict.add_argument(
        "--no-strict-sites", dest="site_match_strict", action="store_false", default=None,
        help="Do not require site matches",
    )
    run_parser.add_argument(
        "--data-centric", dest="gene_centric", action="store_false", default=None,
        help="One node per measurement instead of per gene",
    )
    run_parser.add_argument(
        "--add-unknown-effects", dest="add_in_unknown_effects", action="store_true", default=None,
        help="Use sites with unknown effect as ambiguous causes",
    )
    run_parser.add_argument("--workers", dest="n_workers", type=int, help="Worker threads")
    run_parser.add_argument("--output", dest="output_prefix", help="Output file prefix")
    run_parser.add_argument("--log-level", default="INFO", help="Logging level")
    run_parser.add_argument("--log-file", help="Log file")

    return parser


OVERRIDES = (
    "platform_file",
    "values_file",
    "value_column",
    "network_file",
    "site_effect_file",
    "resource_dir",
    "graph_type",
    "value_threshold",
    "activity_threshold",
    "site_match_proximity_threshold",
    "site_match_strict",
    "gene_centric",
    "add_in_unknown_effects",
    "n_workers",
    "output_prefix",
)


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Run configuration from the config file overlaid with command line options."""
    config = RunConfig.from_yaml(args.config) if args.config else RunConfig()
    for name in OVERRIDES:
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)
    return config


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logger(level=args.log_level, log_file=args.log_file)

    if args.command == "run":
        from .pipeline import generate_graphs_from_files

        try:
            config = config_from_args(args)
            result = generate_graphs_from_files(config)
        except (ConfigurationError, FileNotFoundError, ProteomicsFileError, GraphWriteError) as e:
            logger.error(str(e))
            return 1

        logger.info(
            f"{len(result.search)} relations, graph written to "
            f"{result.sif_path} and {result.format_path}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
