"""
Defines the statistics record reported by the monitored server:
- load average
- memory, disk and network totals with their used share

A record only exists once every field of a stats line parsed.
It lives for a single poll cycle and is never stored.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class StatsRecord:
    load_average: float
    total_memory: int
    used_memory: int
    total_disk: int
    used_disk: int
    total_network: int
    used_network: int

    @property
    def memory_usage(self) -> float:
        return self.used_memory / self.total_memory

    @property
    def disk_usage(self) -> float:
        return self.used_disk / self.total_disk

    @property
    def network_usage(self) -> float:
        return self.used_network / self.total_network

    @property
    def free_disk(self) -> int:
        return self.total_disk - self.used_disk

    @property
    def free_network(self) -> int:
        return self.total_network - self.used_network

    def to_line(self) -> str:
        """ Render the record in the wire format served by the stats endpoint. """
        return ",".join(str(v) for v in (
            self.load_average,
            self.total_memory, self.used_memory,
            self.total_disk, self.used_disk,
            self.total_network, self.used_network,
        ))
