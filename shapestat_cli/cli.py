"""
shapestat CLI - Main entry point.

Loads a YAML scene, builds its shapes and prints measurements or statistics.
Optionally publishes the statistics over MQTT.
"""

import argparse
import logging
import sys
from typing import List, Optional

from shapestat import SceneConfig, ShapeRegistry, ShapeStats, StatsAggregator, StatsDispatcher
from shapestat.delivery import QueueContext
from shapestat.logging import configure_logging, create_logger
from shapestat_mqtt import LargestShapePublisher, StatsPublisher

MISSING = "-"


def format_stats(stats: ShapeStats) -> List[str]:
    """Render stats as printable lines."""
    lines = [
        f"Shapes:               {stats.shape_count}",
        f"Longest description:  {stats.longest_description or MISSING}",
        f"Shortest description: {stats.shortest_description or MISSING}",
        f"Largest area shape:   {stats.largest_area_description or MISSING}",
        f"Smallest area shape:  {stats.smallest_area_description or MISSING}",
        f"Longest perimeter:    {stats.longest_perimeter_description or MISSING}",
        f"Shortest perimeter:   {stats.shortest_perimeter_description or MISSING}",
    ]
    for skip in stats.skipped:
        lines.append(
            f"Skipped #{skip.index}: {skip.description} ({skip.error_type}: {skip.reason})"
        )
    return lines


def describe(registry: ShapeRegistry) -> List[str]:
    """Render every shape with its area (or area error) and perimeter."""
    lines = []
    for index, shape in enumerate(registry.shapes()):
        report = StatsAggregator.area_report(shape)
        area = report.area if report.ok else f"error ({type(report.error).__name__})"
        lines.append(
            f"{index}. {report.description} | area={area} | perimeter={shape.perimeter()}"
        )
    return lines


def run_stats(
    scene: SceneConfig,
    registry: ShapeRegistry,
    deferred: bool = False,
    publish: bool = False,
    timeout: float = 10.0,
) -> ShapeStats:
    """
    Compute stats for a built scene, printing them on delivery.

    Raises:
        ValueError: If publishing is requested without mqtt_config
        ConnectionError: If a publisher cannot reach the broker
        TimeoutError: If deferred delivery does not arrive in time
    """
    stats_publisher = None
    largest_publisher = None

    if publish:
        mqtt_config = scene.mqtt_config
        if mqtt_config is None:
            raise ValueError(f"Scene '{scene.scene_id}' has no mqtt_config to publish with")

        logger = create_logger("publisher")
        common = dict(
            broker_host=mqtt_config.broker,
            broker_port=mqtt_config.port,
            scene_id=scene.scene_id,
            logger=logger,
            username=mqtt_config.username,
            password=mqtt_config.password,
            qos=mqtt_config.qos,
        )
        stats_publisher = StatsPublisher(
            topic=mqtt_config.stats_topic_for(scene.scene_id),
            client_id=f"{mqtt_config.client_id}_stats",
            **common
        )
        largest_publisher = LargestShapePublisher(
            topic=mqtt_config.largest_topic_for(scene.scene_id),
            client_id=f"{mqtt_config.client_id}_largest",
            **common
        )

    def on_stats(stats: ShapeStats) -> None:
        for line in format_stats(stats):
            print(line)
        if stats_publisher is not None:
            stats_publisher.handle_stats(stats)

    publishers = [p for p in (stats_publisher, largest_publisher) if p is not None]
    try:
        for publisher in publishers:
            if not publisher.connect(timeout=timeout):
                raise ConnectionError(
                    f"Could not connect to MQTT broker {publisher.broker}"
                )

        aggregator = StatsAggregator(observer=largest_publisher)

        if not deferred:
            with StatsDispatcher(aggregator=aggregator) as dispatcher:
                return dispatcher.compute_stats(registry, on_stats)

        foreground = QueueContext()
        with StatsDispatcher(aggregator=aggregator, context=foreground) as dispatcher:
            future = dispatcher.compute_stats_async(registry, on_stats)
            if not foreground.run_next(timeout=timeout):
                raise TimeoutError(f"No stats delivered within {timeout}s")
            return future.result()

    finally:
        for publisher in publishers:
            publisher.disconnect()


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shapestat",
        description="shapestat - Measure shapes and report collection statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List every shape with area and perimeter
  shapestat describe config/scene.yaml

  # Largest/smallest area, longest/shortest description
  shapestat stats config/scene.yaml

  # Aggregate on a worker thread, deliver on the main thread
  shapestat stats config/scene.yaml --deferred

  # Also publish the results over MQTT (uses the scene's mqtt_config)
  shapestat stats config/scene.yaml --publish
"""
    )

    # Global arguments
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the scene's log_level"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    describe_cmd = subparsers.add_parser('describe', help='List shapes with area and perimeter')
    describe_cmd.add_argument('scene', help='Path to scene YAML')

    stats_cmd = subparsers.add_parser('stats', help='Compute collection statistics')
    stats_cmd.add_argument('scene', help='Path to scene YAML')
    stats_cmd.add_argument('--deferred', action='store_true', help='Aggregate on a worker thread')
    stats_cmd.add_argument('--publish', action='store_true', help='Publish results over MQTT')
    stats_cmd.add_argument(
        '--timeout',
        type=float,
        default=10.0,
        help='Seconds to wait for broker connection / deferred delivery (default: 10)'
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        override = getattr(logging, args.log_level) if args.log_level else None
        configure_logging(override or logging.INFO)
        scene = SceneConfig.from_yaml(args.scene)
        if override is None:
            configure_logging(scene.level)
        registry = scene.build_registry()

        if args.command == 'describe':
            for line in describe(registry):
                print(line)

        elif args.command == 'stats':
            run_stats(
                scene,
                registry,
                deferred=args.deferred,
                publish=args.publish,
                timeout=args.timeout,
            )

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
