#!/usr/bin/env python3
"""
Main CLI for the Portfolio Analysis Engine.
Usage: python cli.py analyze PORTFOLIO_JSON
"""

import os
import sys
import logging
import argparse
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analysis.analysis_job import run_portfolio_analysis, load_portfolio, AnalysisJobError
from analysis.guardrails import DataQualityError
from analysis.engine import (
    benchmark_companies,
    analyze_trends,
    generate_portfolio_insights,
)
from ingestion.transforms.normalizers import NormalizationError
from ingestion.transforms.validators import ValidationError
from reports.insights import load_insight_thresholds, InsightError
from reports.formatters import (
    format_portfolio_summary,
    format_benchmark_line,
    format_trend_lines,
)

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Analyze a portfolio of companies from a JSON file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py analyze portfolio.json
  python cli.py analyze portfolio.json --metrics Revenue "Net Income" --output out.json
  python cli.py insights portfolio.json --thresholds config/insight_thresholds.yml
  python cli.py benchmark portfolio.json
  python cli.py trends portfolio.json Revenue
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser('analyze', help='Run the full analysis and save JSON')
    analyze.add_argument('portfolio', help='Portfolio JSON file')
    analyze.add_argument('--metrics', nargs='+',
                         help='Metrics for trend analysis (default: $TREND_METRICS)')
    analyze.add_argument('--output',
                         help='Output JSON path (default: $PORTFOLIO_OUTPUT_DIR/<portfolio>_analysis.json)')
    analyze.add_argument('--thresholds', help='Insight thresholds YAML file')
    analyze.add_argument('--quiet', '-q', action='store_true',
                         help='Minimal output (just success/failure)')

    insights = subparsers.add_parser('insights', help='Print portfolio insights')
    insights.add_argument('portfolio', help='Portfolio JSON file')
    insights.add_argument('--thresholds', help='Insight thresholds YAML file')

    benchmark = subparsers.add_parser('benchmark', help='Print peer benchmarking per company')
    benchmark.add_argument('portfolio', help='Portfolio JSON file')

    trends = subparsers.add_parser('trends', help='Print trend analysis for metrics')
    trends.add_argument('portfolio', help='Portfolio JSON file')
    trends.add_argument('metrics', nargs='+', help='Metric names (e.g. Revenue)')

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'WARNING').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    args = build_parser().parse_args(argv)

    try:
        if args.command == 'analyze':
            return run_analyze(args)

        companies = load_portfolio(Path(args.portfolio))

        if args.command == 'insights':
            thresholds = load_insight_thresholds(args.thresholds)
            insights = generate_portfolio_insights(companies, thresholds)
            if not insights:
                print("No insights triggered")
            for insight in insights:
                print(f"- {insight}")

        elif args.command == 'benchmark':
            for result in benchmark_companies(companies):
                print(format_benchmark_line(result))

        elif args.command == 'trends':
            for analysis in analyze_trends(companies, args.metrics):
                for line in format_trend_lines(analysis):
                    print(line)

        return 0

    except (AnalysisJobError, DataQualityError, NormalizationError,
            ValidationError, InsightError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


def run_analyze(args) -> int:
    """Run the analysis job and print a summary."""
    portfolio_path = Path(args.portfolio)

    if args.output is None:
        output_dir = Path(os.getenv('PORTFOLIO_OUTPUT_DIR', './data/processed/portfolio'))
        output_path = output_dir / f'{portfolio_path.stem}_analysis.json'
    else:
        output_path = Path(args.output)

    thresholds = load_insight_thresholds(args.thresholds)

    result = run_portfolio_analysis(
        input_path=portfolio_path,
        output_path=output_path,
        metric_names=args.metrics,
        thresholds=thresholds
    )

    if result['status'] != 'completed':
        print(f"ERROR: Analysis failed for {portfolio_path}: {result['error_message']}", file=sys.stderr)
        return 1

    if args.quiet:
        print(f"{portfolio_path.name} analysis complete: {result['output_path']}")
        return 0

    print(f"Analyzed {result['companies_analyzed']} companies in {result['duration_seconds']:.2f}s")
    print(f"Results saved to: {result['output_path']}")
    print()

    for line in format_portfolio_summary(result['portfolio_metrics']):
        print(f"   {line}")

    if result['warnings']:
        print()
        print("Data warnings:")
        for warning in result['warnings']:
            print(f"   - {warning}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
