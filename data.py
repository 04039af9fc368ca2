from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd
import requests

from constants import DATASET_URL, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger("heat_map.data")

RECORD_COLUMNS = ["year", "month", "variance", "temperature"]


class HeatMapDataError(Exception):
    """Base class for dataset loading failures."""


class NetworkError(HeatMapDataError):
    """The dataset URL could not be reached or answered with an error status."""


class ParseError(HeatMapDataError):
    """The dataset body is not JSON or does not have the expected shape."""


@dataclass(frozen=True)
class VarianceRecord:
    year: int
    month: int  # zero-based
    variance: float
    temperature: float


@dataclass(frozen=True)
class Dataset:
    base_temperature: float
    records: tuple[VarianceRecord, ...]

    @property
    def is_empty(self) -> bool:
        return not self.records

    def years(self) -> list[int]:
        # distinct years, in order of first appearance
        return list(dict.fromkeys(r.year for r in self.records))

    def year_range(self) -> tuple[int, int]:
        years = self.years()
        if not years:
            raise ValueError("Dataset has no records.")
        return min(years), max(years)

    def temperature_extent(self) -> tuple[float, float]:
        if self.is_empty:
            raise ValueError("Dataset has no records.")
        temps = [r.temperature for r in self.records]
        return min(temps), max(temps)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(r.year, r.month, r.variance, r.temperature) for r in self.records],
            columns=RECORD_COLUMNS,
        )


def fetch_payload(
    url: str,
    *,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> Any:
    http = session if session is not None else requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(f"Could not fetch dataset from {url}: {exc}") from exc
    try:
        return response.json()
    except ValueError as exc:
        raise ParseError(f"Dataset at {url} is not valid JSON: {exc}") from exc


def _to_record(entry: Any, base_temperature: float) -> VarianceRecord:
    year = int(entry["year"])
    month = int(entry["month"])
    variance = float(entry["variance"])
    if not 1 <= month <= 12:
        raise ValueError(f"month {month} outside 1..12")
    if math.isnan(variance):
        raise ValueError("variance is NaN")
    return VarianceRecord(
        year=year,
        month=month - 1,
        variance=variance,
        temperature=base_temperature + variance,
    )


def parse_dataset(payload: Any) -> Dataset:
    """
    Normalize the raw JSON payload into a Dataset.

    Months become zero-based and every record carries its absolute
    temperature (base + variance). Entries that are missing a field or hold
    values that cannot be converted are skipped and logged.
    """
    if not isinstance(payload, dict):
        raise ParseError("Dataset payload must be a JSON object.")
    base = payload.get("baseTemperature")
    if isinstance(base, bool) or not isinstance(base, (int, float)):
        raise ParseError("Dataset payload has no numeric 'baseTemperature'.")
    entries = payload.get("monthlyVariance")
    if not isinstance(entries, list):
        raise ParseError("Dataset payload has no 'monthlyVariance' list.")

    base_temperature = float(base)
    records = []
    skipped = 0
    for i, entry in enumerate(entries):
        try:
            records.append(_to_record(entry, base_temperature))
        except (KeyError, TypeError, ValueError) as exc:
            skipped += 1
            logger.warning("Skipping malformed monthlyVariance[%d] %r: %s", i, entry, exc)
    if skipped:
        logger.warning("Skipped %d of %d dataset entries", skipped, len(entries))
    logger.info("Parsed %d records (base temperature %.2f)", len(records), base_temperature)
    return Dataset(base_temperature=base_temperature, records=tuple(records))


def load_dataset(
    url: str = DATASET_URL,
    *,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> Dataset:
    logger.info("Fetching dataset from %s", url)
    return parse_dataset(fetch_payload(url, timeout=timeout, session=session))


def describe_dataset(dataset: Dataset) -> str:
    """Description line shown under the page title, e.g. '1753 - 2015: base temperature 8.66℃'."""
    first, last = dataset.year_range()
    return f"{first} - {last}: base temperature {dataset.base_temperature:g}℃"
