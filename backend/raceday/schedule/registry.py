from dataclasses import dataclass


@dataclass(frozen=True)
class SeriesDescriptor:
    code: str
    series_id: int
    fallback_name: str
    logo: str


SERIES: dict[str, SeriesDescriptor] = {
    "N1": SeriesDescriptor("N1", 1, "NASCAR Cup Series", "N1.png"),
    "N2": SeriesDescriptor("N2", 2, "NASCAR O'Reilly Auto Parts Series", "N2.png"),
    "N3": SeriesDescriptor("N3", 3, "NASCAR Craftsman Truck Series", "N3.png"),
}
