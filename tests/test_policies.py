import pytest

from statspoll_core.agent.policies import NETWORK_MBIT_FACTOR, evaluate
from statspoll_core.config import Thresholds
from statspoll_core.models.stats import StatsRecord
from statspoll_core.telemetry.parser import parse_stats

from conftest import GOOD_LINE

MB = 1024 * 1024


def make_record(load=1.0, mem=(1000, 100), disk=(1000, 100), net=(1000, 100)):
    return StatsRecord(load, mem[0], mem[1], disk[0], disk[1], net[0], net[1])


def test_healthy_record_has_no_warnings():
    assert evaluate(make_record()) == []


def test_end_to_end_example_fires_disk_and_network_only():
    warnings = evaluate(parse_stats(GOOD_LINE))

    assert warnings == [
        "Free disk space is too low: 0 Mb left",
        f"Network bandwidth usage high: {50000 * NETWORK_MBIT_FACTOR:.2f} Mbit/s available",
    ]
    assert warnings[1] == "Network bandwidth usage high: 0.38 Mbit/s available"


def test_load_warning_reports_value():
    assert evaluate(make_record(load=42.125)) == ["Load Average is too high: 42.12"]


def test_memory_warning_reports_rounded_percentage():
    assert evaluate(make_record(mem=(1000, 850))) == ["Memory usage too high: 85%"]


def test_disk_warning_reports_free_megabytes():
    record = make_record(disk=(100 * MB, 95 * MB + 10))

    assert evaluate(record) == ["Free disk space is too low: 4 Mb left"]


def test_network_warning_reports_free_mbit():
    record = make_record(net=(10 * MB, 10 * MB - MB // 2))

    assert evaluate(record) == ["Network bandwidth usage high: 4.00 Mbit/s available"]


def test_all_checks_fire_in_fixed_order():
    record = make_record(load=31.0, mem=(10, 9), disk=(10, 10), net=(10, 10))

    warnings = evaluate(record)

    assert [w.split(":")[0] for w in warnings] == [
        "Load Average is too high",
        "Memory usage too high",
        "Free disk space is too low",
        "Network bandwidth usage high",
    ]


@pytest.mark.parametrize("record", [
    make_record(load=30.0),
    make_record(mem=(1000, 800)),
    make_record(disk=(1000, 900)),
    make_record(net=(1000, 900)),
])
def test_value_equal_to_threshold_does_not_warn(record):
    assert evaluate(record) == []


def test_custom_thresholds():
    thresholds = Thresholds(load=5.0, memory=0.5, disk=0.99, network=0.99)
    record = make_record(load=6.0, mem=(1000, 600), disk=(1000, 950), net=(1000, 950))

    warnings = evaluate(record, thresholds)

    assert warnings == ["Load Average is too high: 6.00", "Memory usage too high: 60%"]
