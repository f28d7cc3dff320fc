"""Field selectors accepted by the ipstack `fields` query parameter.

See https://ipstack.com/documentation#fields
"""

# General
FIELD_IP = "ip"
FIELD_HOSTNAME = "hostname"  # only returned if Hostname Lookup is enabled
FIELD_TYPE = "type"
FIELD_CONTINENT_CODE = "continent_code"
FIELD_CONTINENT_NAME = "continent_name"
FIELD_COUNTRY_CODE = "country_code"
FIELD_COUNTRY_NAME = "country_name"
FIELD_REGION_CODE = "region_code"
FIELD_REGION_NAME = "region_name"
FIELD_CITY = "city"
FIELD_ZIP = "zip"
FIELD_LATITUDE = "latitude"
FIELD_LONGITUDE = "longitude"

# Location
FIELD_LOCATION = "location"
FIELD_LOCATION_GEONAME_ID = "location.geoname_id"
FIELD_LOCATION_CAPITAL = "location.capital"
FIELD_LOCATION_LANGUAGES = "location.languages"
FIELD_LOCATION_LANGUAGES_CODE = "location.languages.code"
FIELD_LOCATION_LANGUAGES_NAME = "location.languages.name"
FIELD_LOCATION_LANGUAGES_NATIVE = "location.languages.native"
FIELD_LOCATION_COUNTRY_FLAG = "location.country_flag"
FIELD_LOCATION_COUNTRY_FLAG_EMOJI = "location.country_flag_emoji"
FIELD_LOCATION_COUNTRY_FLAG_EMOJI_UNICODE = "location.country_flag_emoji_unicode"
FIELD_LOCATION_CALLING_CODE = "location.calling_code"
FIELD_LOCATION_IS_EU = "location.is_eu"

# Time zone
FIELD_TIME_ZONE = "time_zone"
FIELD_TIME_ZONE_ID = "time_zone.id"
FIELD_TIME_ZONE_CURRENT_TIME = "time_zone.current_time"
FIELD_TIME_ZONE_GMT_OFFSET = "time_zone.gmt_offset"
FIELD_TIME_ZONE_CODE = "time_zone.code"
FIELD_TIME_ZONE_IS_DAYLIGHT_SAVING = "time_zone.is_daylight_saving"

# Currency
FIELD_CURRENCY = "currency"
FIELD_CURRENCY_CODE = "currency.code"
FIELD_CURRENCY_NAME = "currency.name"
FIELD_CURRENCY_PLURAL = "currency.plural"
FIELD_CURRENCY_SYMBOL = "currency.symbol"
FIELD_CURRENCY_SYMBOL_NATIVE = "currency.symbol_native"

# Connection
FIELD_CONNECTION = "connection"
FIELD_CONNECTION_ASN = "connection.asn"
FIELD_CONNECTION_ISP = "connection.isp"

# Security (requires a paid plan and the `security=1` flag)
FIELD_SECURITY = "security"
FIELD_SECURITY_IS_PROXY = "security.is_proxy"
FIELD_SECURITY_PROXY_TYPE = "security.proxy_type"
FIELD_SECURITY_IS_CRAWLER = "security.is_crawler"
FIELD_SECURITY_CRAWLER_NAME = "security.crawler_name"
FIELD_SECURITY_CRAWLER_TYPE = "security.crawler_type"
FIELD_SECURITY_IS_TOR = "security.is_tor"
FIELD_SECURITY_THREAT_LEVEL = "security.threat_level"
FIELD_SECURITY_THREAT_TYPES = "security.threat_types"

ALL_FIELDS: tuple[str, ...] = (
    FIELD_IP,
    FIELD_HOSTNAME,
    FIELD_TYPE,
    FIELD_CONTINENT_CODE,
    FIELD_CONTINENT_NAME,
    FIELD_COUNTRY_CODE,
    FIELD_COUNTRY_NAME,
    FIELD_REGION_CODE,
    FIELD_REGION_NAME,
    FIELD_CITY,
    FIELD_ZIP,
    FIELD_LATITUDE,
    FIELD_LONGITUDE,
    FIELD_LOCATION,
    FIELD_LOCATION_GEONAME_ID,
    FIELD_LOCATION_CAPITAL,
    FIELD_LOCATION_LANGUAGES,
    FIELD_LOCATION_LANGUAGES_CODE,
    FIELD_LOCATION_LANGUAGES_NAME,
    FIELD_LOCATION_LANGUAGES_NATIVE,
    FIELD_LOCATION_COUNTRY_FLAG,
    FIELD_LOCATION_COUNTRY_FLAG_EMOJI,
    FIELD_LOCATION_COUNTRY_FLAG_EMOJI_UNICODE,
    FIELD_LOCATION_CALLING_CODE,
    FIELD_LOCATION_IS_EU,
    FIELD_TIME_ZONE,
    FIELD_TIME_ZONE_ID,
    FIELD_TIME_ZONE_CURRENT_TIME,
    FIELD_TIME_ZONE_GMT_OFFSET,
    FIELD_TIME_ZONE_CODE,
    FIELD_TIME_ZONE_IS_DAYLIGHT_SAVING,
    FIELD_CURRENCY,
    FIELD_CURRENCY_CODE,
    FIELD_CURRENCY_NAME,
    FIELD_CURRENCY_PLURAL,
    FIELD_CURRENCY_SYMBOL,
    FIELD_CURRENCY_SYMBOL_NATIVE,
    FIELD_CONNECTION,
    FIELD_CONNECTION_ASN,
    FIELD_CONNECTION_ISP,
    FIELD_SECURITY,
    FIELD_SECURITY_IS_PROXY,
    FIELD_SECURITY_PROXY_TYPE,
    FIELD_SECURITY_IS_CRAWLER,
    FIELD_SECURITY_CRAWLER_NAME,
    FIELD_SECURITY_CRAWLER_TYPE,
    FIELD_SECURITY_IS_TOR,
    FIELD_SECURITY_THREAT_LEVEL,
    FIELD_SECURITY_THREAT_TYPES,
)
