from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class LocationLanguage(BaseModel):
    """A language spoken in the country associated with the IP."""

    code: str | None = None
    name: str | None = None
    native: str | None = None


class Location(BaseModel):
    geoname_id: int | None = None
    capital: str | None = None
    languages: list[LocationLanguage] | None = None
    country_flag: str | None = None
    country_flag_emoji: str | None = None
    country_flag_emoji_unicode: str | None = None
    calling_code: str | None = None
    is_eu: bool | None = None


class Timezone(BaseModel):
    id: str | None = None
    current_time: datetime | None = None
    # GMT offset in seconds, e.g. -25200 for PST.
    gmt_offset: int | None = None
    code: str | None = None
    is_daylight_saving: bool | None = None


class Currency(BaseModel):
    code: str | None = None
    name: str | None = None
    plural: str | None = None
    symbol: str | None = None
    symbol_native: str | None = None


class Connection(BaseModel):
    asn: int | None = None
    isp: str | None = None


class Security(BaseModel):
    is_proxy: bool | None = None
    proxy_type: str | None = None
    is_crawler: bool | None = None
    crawler_name: str | None = None
    crawler_type: str | None = None
    is_tor: bool | None = None
    threat_level: str | None = None
    threat_types: Any = None


class GeoRecord(BaseModel):
    """Geolocation record for one IP address as returned by ipstack.

    The nested objects (`location`, `time_zone`, `currency`, `connection`,
    `security`) are only present when the matching field selector was
    requested and the plan allows it.
    """

    model_config = ConfigDict(extra="ignore")

    ip: str | None = None
    hostname: str | None = None
    type: str | None = None
    continent_code: str | None = None
    continent_name: str | None = None
    country_code: str | None = None
    country_name: str | None = None
    region_code: str | None = None
    region_name: str | None = None
    city: str | None = None
    zip: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    location: Location | None = None
    time_zone: Timezone | None = None
    currency: Currency | None = None
    connection: Connection | None = None
    security: Security | None = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_lat_lon(cls, value: Any) -> float | None:
        """Allow latitude/longitude to be provided as strings, numbers, or null."""
        if value is None:
            return None
        try:
            # For general GPS and mapping, 5-6 decimal places (e.g., 34.052235)
            return round(float(value), 6)
        except (TypeError, ValueError):
            return None


class ApiErrorBody(BaseModel):
    code: int = 0
    type: str = ""
    info: str = ""


class ApiErrorEnvelope(BaseModel):
    """Minimal shape used to detect an error reported inside a response body.

    `success` defaults to True so that a regular record (which has no such
    field) is not mistaken for a failure.
    """

    success: bool = True
    error: ApiErrorBody | None = None
