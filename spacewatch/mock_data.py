"""Fixed offline datasets served when an upstream feed cannot be used.

The records are written in upstream wire format and pushed through the same
normalizers as live data, so mock and live envelopes share one schema and the
orbit classes are derived exactly as they would be for a live record.
"""

from .approaches import flatten, normalize_feed
from .catalog import normalize_satcat

DATASET_VERSION = "2026.02.1"
MOCK_SOURCE = "Mock Data"

SATCAT_RECORDS = (
    {
        "NORAD_CAT_ID": "25544",
        "OBJECT_NAME": "ISS (ZARYA)",
        "OBJECT_ID": "1998-067A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "ISS",
        "LAUNCH_DATE": "1998-11-20",
        "DECAY_DATE": None,
        "INCLINATION": "51.64",
        "PERIOD": "92.9",
        "APOGEE": "422",
        "PERIGEE": "418",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "48274",
        "OBJECT_NAME": "CSS (TIANHE)",
        "OBJECT_ID": "2021-035A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "PRC",
        "LAUNCH_DATE": "2021-04-29",
        "DECAY_DATE": None,
        "INCLINATION": "41.47",
        "PERIOD": "91.5",
        "APOGEE": "389",
        "PERIGEE": "382",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "20580",
        "OBJECT_NAME": "HST",
        "OBJECT_ID": "1990-037B",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "US",
        "LAUNCH_DATE": "1990-04-24",
        "DECAY_DATE": None,
        "INCLINATION": "28.47",
        "PERIOD": "95.4",
        "APOGEE": "540",
        "PERIGEE": "535",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "36585",
        "OBJECT_NAME": "NAVSTAR 65 (USA 213)",
        "OBJECT_ID": "2010-022A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "US",
        "LAUNCH_DATE": "2010-05-28",
        "DECAY_DATE": None,
        "INCLINATION": "55.02",
        "PERIOD": "717.9",
        "APOGEE": "20459",
        "PERIGEE": "20103",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "41748",
        "OBJECT_NAME": "INTELSAT 36",
        "OBJECT_ID": "2016-053B",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "ITSO",
        "LAUNCH_DATE": "2016-08-24",
        "DECAY_DATE": None,
        "INCLINATION": "0.02",
        "PERIOD": "1436.1",
        "APOGEE": "35800",
        "PERIGEE": "35774",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "28163",
        "OBJECT_NAME": "MOLNIYA 1-93",
        "OBJECT_ID": "2004-005A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "CIS",
        "LAUNCH_DATE": "2004-02-18",
        "DECAY_DATE": None,
        "INCLINATION": "62.8",
        "PERIOD": "717.6",
        "APOGEE": "39700",
        "PERIGEE": "610",
        "RCS_SIZE": "LARGE",
        "CURRENT_STATUS": "INACTIVE",
    },
    {
        "NORAD_CAT_ID": "22285",
        "OBJECT_NAME": "SL-16 R/B",
        "OBJECT_ID": "1992-093B",
        "OBJECT_TYPE": "ROCKET BODY",
        "COUNTRY": "CIS",
        "LAUNCH_DATE": "1992-12-25",
        "DECAY_DATE": None,
        "INCLINATION": "71.0",
        "PERIOD": "101.9",
        "APOGEE": "845",
        "PERIGEE": "835",
        "RCS_SIZE": "LARGE",
    },
    {
        "NORAD_CAT_ID": "34427",
        "OBJECT_NAME": "COSMOS 2251 DEB",
        "OBJECT_ID": "1993-036A",
        "OBJECT_TYPE": "DEBRIS",
        "COUNTRY": "CIS",
        "LAUNCH_DATE": "1993-06-16",
        "DECAY_DATE": None,
        "INCLINATION": "74.04",
        "PERIOD": "100.5",
        "APOGEE": "800",
        "PERIGEE": "760",
        "RCS_SIZE": "SMALL",
    },
    {
        "NORAD_CAT_ID": "37820",
        "OBJECT_NAME": "TIANGONG 1",
        "OBJECT_ID": "2011-053A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "PRC",
        "LAUNCH_DATE": "2011-09-29",
        "DECAY_DATE": "2018-04-02",
        "INCLINATION": "42.77",
        "PERIOD": None,
        "APOGEE": None,
        "PERIGEE": None,
        "RCS_SIZE": "LARGE",
    },
)


def _neo(neo_id, name, diameter, hazardous, approach_date, epoch_ms, km_s, miss_km):
    low, high = diameter
    return {
        "id": neo_id,
        "neo_reference_id": neo_id,
        "name": name,
        "estimated_diameter": {
            "kilometers": {"estimated_diameter_min": low, "estimated_diameter_max": high},
        },
        "is_potentially_hazardous_asteroid": hazardous,
        "is_sentry_object": False,
        "close_approach_data": [
            {
                "close_approach_date": approach_date,
                "epoch_date_close_approach": epoch_ms,
                "relative_velocity": {"kilometers_per_second": km_s},
                "miss_distance": {"kilometers": miss_km},
                "orbiting_body": "Earth",
            }
        ],
    }


NEO_FEED = {
    "element_count": 4,
    "near_earth_objects": {
        "2026-02-10": [
            _neo("2026-AB3", "2026 AB3", (0.03, 0.05), False, "2026-02-10", 1770711300000, "7.7777777778", "35000"),
        ],
        "2026-02-14": [
            _neo("2025-CW1", "2025 CW1", (0.1, 0.14), False, "2026-02-14", 1771063200000, "12.5", "150000"),
        ],
        "2026-03-01": [
            _neo("2024-XY2", "2024 XY2", (0.6, 1.0), True, "2026-03-01", 1772375400000, "17.2222222222", "2500000"),
        ],
        "2029-04-13": [
            _neo("99942-A", "99942 Apophis (Sim)", (0.34, 0.4), True, "2029-04-13", 1870811160000, "8.3333333333", "31000"),
        ],
    },
}

CATALOG = normalize_satcat(SATCAT_RECORDS, source=MOCK_SOURCE)
NEO = normalize_feed(NEO_FEED)
NEO_APPROACHES = tuple(flatten(NEO.asteroids, NEO.events))
