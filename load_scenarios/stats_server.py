"""
Fake stats endpoint for exercising the poller locally.

Serves GET /_stats in the same comma-separated format as the production
server. The scenario decides what comes back:
- normal      healthy numbers with a little jitter
- overloaded  every threshold exceeded
- flaky       every third request answers 503
- garbage     a malformed line
- down        always 500

Run:  python load_scenarios/stats_server.py --scenario overloaded
Then: statspoll --endpoint http://127.0.0.1:8080/_stats --interval 5
"""
import argparse
import itertools
import random

from flask import Flask, Response

from statspoll_core.logger_config import setup_logger
from statspoll_core.models.stats import StatsRecord

logger = setup_logger()

GIB = 1024 ** 3
SCENARIOS = ["normal", "overloaded", "flaky", "garbage", "down"]


def normal_stats(rng: random.Random) -> StatsRecord:
    return StatsRecord(
        load_average=round(rng.uniform(0.5, 8.0), 2),
        total_memory=16 * GIB,
        used_memory=int(16 * GIB * rng.uniform(0.3, 0.6)),
        total_disk=500 * GIB,
        used_disk=int(500 * GIB * rng.uniform(0.4, 0.7)),
        total_network=125_000_000,
        used_network=int(125_000_000 * rng.uniform(0.1, 0.5)),
    )


def overloaded_stats(rng: random.Random) -> StatsRecord:
    return StatsRecord(
        load_average=round(rng.uniform(31.0, 60.0), 2),
        total_memory=16 * GIB,
        used_memory=int(16 * GIB * 0.95),
        total_disk=500 * GIB,
        used_disk=int(500 * GIB * 0.97),
        total_network=125_000_000,
        used_network=int(125_000_000 * 0.96),
    )


def create_app(scenario: str = "normal", seed=None) -> Flask:
    if scenario not in SCENARIOS:
        raise ValueError(f"Unknown scenario {scenario!r}, expected one of {SCENARIOS}")

    app = Flask(__name__)
    rng = random.Random(seed)
    counter = itertools.count(1)

    @app.route("/_stats")
    def stats():
        n = next(counter)
        if scenario == "down" or (scenario == "flaky" and n % 3 == 0):
            logger.info(f"[{scenario}] request #{n}: failing on purpose")
            status = 503 if scenario == "flaky" else 500
            return Response("unavailable", status=status, mimetype="text/plain")
        if scenario == "garbage":
            return Response("not,a,stats,line", mimetype="text/plain")

        record = overloaded_stats(rng) if scenario == "overloaded" else normal_stats(rng)
        return Response(record.to_line(), mimetype="text/plain")

    return app


def main():
    parser = argparse.ArgumentParser(description="Serve fake server statistics.")
    parser.add_argument("--scenario", choices=SCENARIOS, default="normal")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args()

    print(f"[*] Stats server started, scenario: {args.scenario}")
    create_app(args.scenario, seed=args.seed).run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
