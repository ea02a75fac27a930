#!/usr/bin/env python3
"""
Plan a road trip through a set of attractions.

Loads the road and attraction tables, then either runs a single strategy or
compares every registered strategy on the same query.

Usage:
    python run_road_trip.py roads.csv attractions.csv "Houston TX" "Philadelphia PA" \
        "Liberty Bell" "Hollywood Sign" [--strategy held-karp] [--verbose]
"""

import argparse
import logging
import sys

from roadtrip_core import (
    STRATEGIES,
    CityId,
    PlannerSettings,
    RoadTripError,
    RoutePlanner,
    load_attractions,
    load_road_graph,
)
from roadtrip_core.logging_config import log_exception, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description='Road trip planner: order attractions between two cities'
    )
    parser.add_argument('roads_csv', help='Road table (CityA,CityB,Distance)')
    parser.add_argument('attractions_csv', help='Attraction table (Attraction,Location)')
    parser.add_argument('start', help='Start city, e.g. "Houston TX"')
    parser.add_argument('end', help='End city (same as start for a round trip)')
    parser.add_argument('attractions', nargs='*', help='Attractions to visit')
    parser.add_argument('--strategy', choices=sorted(STRATEGIES),
                        help='Run a single strategy instead of comparing all')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')

    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else None)
    logger = logging.getLogger('roadtrip_core.run')

    try:
        start = CityId.parse(args.start)
        end = CityId.parse(args.end)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("=" * 80)
    logger.info("ROAD TRIP PLANNER")
    logger.info("=" * 80)
    logger.info(f"Roads: {args.roads_csv}")
    logger.info(f"Attractions: {args.attractions_csv}")
    logger.info(f"Route: {start} -> {end} ({'round trip' if start == end else 'one way'})")

    try:
        graph = load_road_graph(args.roads_csv)
        attractions = load_attractions(args.attractions_csv)
        settings = PlannerSettings.from_env()
        planner = RoutePlanner(graph, attractions, settings)

        _, unresolved = planner.resolve_attractions(args.attractions)
        if unresolved:
            logger.warning(f"Ignoring unknown attractions: {', '.join(unresolved)}")

        if args.strategy:
            result = planner.route(start, end, args.attractions, strategy=args.strategy)
            if not result.found:
                logger.error(f"No valid route found by {result.strategy_name}")
                sys.exit(1)
            logger.info(f"✓ Distance: {result.distance}")
            logger.info(f"✓ Route: {' -> '.join(str(city) for city in result.path)}")
        else:
            report = planner.compare(start, end, args.attractions)
            report.log_summary()
            best = report.cheapest()
            if best is None:
                sys.exit(1)
            logger.info(f"✓ Route: {' -> '.join(str(city) for city in best.path)}")

    except RoadTripError as e:
        log_exception(logger, "Planning failed", e)
        sys.exit(1)

    logger.info("=" * 80)


if __name__ == '__main__':
    main()
