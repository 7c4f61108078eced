from dataclasses import dataclass


@dataclass
class SpaceStats:
    total: int = 0
    occupied: int = 0
    vacant: int = 0
    notice: int = 0
    people_count: int = 0   # tenants present, including those on notice


@dataclass
class ProjectStats(SpaceStats):
    occupancy_percent: int = 0
    conflict_count: int = 0


@dataclass
class PortfolioStats(ProjectStats):
    total_cost: float = 0.0
