from datetime import date

import pytest
from conftest import make_approach, make_neo

from spacewatch import mock_data, pipeline
from spacewatch.results import Failure, FailureKind, InvalidQuery, Success
from spacewatch.schemas import ObjectType, OrbitClass, RiskLevel


def clock():
    return 1_700_000_000_000


def test_payload_scenario(satcat_record):
    query = pipeline.parse_catalog_query(object_type="PAYLOAD", limit=1000)
    seen = []

    def fetch(q):
        seen.append(q)
        return Success(payload=[satcat_record])

    envelope = pipeline.get_catalog(query, fetch=fetch, clock=clock)

    assert seen == [query]
    assert envelope.count == 1
    assert envelope.objects[0].orbit_class is OrbitClass.LEO
    assert envelope.objects[0].status.value == "ACTIVE"
    assert envelope.counts_by_type.model_dump() == {"payload": 1, "rocket_body": 0, "debris": 0, "unknown": 0}
    assert envelope.is_mock is False
    assert envelope.warning is None
    assert envelope.fetched_at == clock()


@pytest.mark.parametrize("kwargs", [{"object_type": "BOGUS"}, {"orbit": "LUNAR"}, {"active": "maybe"}])
def test_invalid_catalog_query(kwargs):
    with pytest.raises(InvalidQuery):
        pipeline.parse_catalog_query(**kwargs)


def test_invalid_type_lists_valid_values():
    with pytest.raises(InvalidQuery) as exc:
        pipeline.parse_catalog_query(object_type="BOGUS")
    assert "PAYLOAD, ROCKET_BODY, DEBRIS, UNKNOWN" in str(exc.value)


def test_catalog_query_defaults_and_clamp():
    query = pipeline.parse_catalog_query()
    assert query.limit == 1000
    assert query.object_type is None
    assert query.active_only is False
    assert pipeline.parse_catalog_query(limit=0).limit == 1
    assert pipeline.parse_catalog_query(limit=10**7).limit == 5000
    assert pipeline.parse_catalog_query(object_type="DEBRIS").object_type is ObjectType.DEBRIS


def test_timeout_serves_fallback_dataset():
    envelope = pipeline.get_catalog(
        pipeline.parse_catalog_query(object_type="DEBRIS"),
        fetch=lambda q: Failure(kind=FailureKind.UPSTREAM_UNAVAILABLE, message="request timed out"),
        clock=clock,
    )
    assert envelope.is_mock is True
    assert "unavailable" in envelope.warning.lower()
    assert envelope.objects == list(mock_data.CATALOG.objects)
    assert envelope.counts_by_type == mock_data.CATALOG.counts_by_type
    assert envelope.counts_by_orbit == mock_data.CATALOG.counts_by_orbit


def test_missing_credentials_serves_mock(no_credentials, satcat_record):
    mock = pipeline.get_catalog(pipeline.parse_catalog_query(), clock=clock)
    live = pipeline.get_catalog(pipeline.parse_catalog_query(), fetch=lambda q: Success(payload=[satcat_record]), clock=clock)

    assert mock.is_mock is True
    assert mock.warning
    assert mock.error_code == "UNAUTHENTICATED"
    assert set(mock.model_dump()) == set(live.model_dump())


def test_filters_recompute_aggregates_after_fetch(satcat_record):
    records = [
        satcat_record,
        dict(satcat_record, NORAD_CAT_ID="1", OBJECT_TYPE="DEBRIS"),
        dict(satcat_record, NORAD_CAT_ID="2", APOGEE="20200", PERIGEE="20100", PERIOD="718"),
        dict(satcat_record, NORAD_CAT_ID="3", DECAY_DATE="2001-01-01"),
    ]
    query = pipeline.parse_catalog_query(orbit="LEO", active="true")
    envelope = pipeline.get_catalog(query, fetch=lambda q: Success(payload=records), clock=clock)

    assert sorted(o.norad_id for o in envelope.objects) == [1, 25544]
    assert envelope.count == 2
    assert envelope.counts_by_orbit.leo == 2
    assert envelope.counts_by_orbit.meo == 0
    assert envelope.counts_by_type.payload == 1
    assert envelope.counts_by_type.debris == 1


def test_parse_approach_query():
    query = pipeline.parse_approach_query("2026-02-10", None, "1", today=date(2026, 1, 1))
    assert query.start_date == date(2026, 2, 10)
    assert query.end_date == date(2026, 2, 10)
    assert query.hazardous_only is True

    default = pipeline.parse_approach_query(today=date(2026, 1, 1))
    assert default.start_date == default.end_date == date(2026, 1, 1)


@pytest.mark.parametrize(
    "start, end, hazardous",
    [
        ("2026-02-01", "2026-02-20", None),
        ("2026-02-10", "2026-02-09", None),
        ("yesterday", None, None),
        ("2026-02-10", None, "maybe"),
    ],
)
def test_invalid_approach_query(start, end, hazardous):
    with pytest.raises(InvalidQuery):
        pipeline.parse_approach_query(start, end, hazardous)


def neo_payload():
    return {
        "element_count": 3,
        "near_earth_objects": {
            "2026-02-10": [
                make_neo("1", "Close", approaches=[make_approach("2026-02-10", "300", epoch=10)]),
                make_neo("2", "Far", hazardous=True, approaches=[make_approach("2026-02-10", "100000", epoch=20)]),
            ]
        },
    }


def test_get_approaches():
    query = pipeline.parse_approach_query("2026-02-10", "2026-02-11")
    envelope = pipeline.get_approaches(query, fetch=lambda q: Success(payload=neo_payload()), clock=clock)

    assert envelope.is_mock is False
    assert envelope.count == 2
    close, far = envelope.approaches
    assert close.risk_iss is RiskLevel.CRITICAL
    assert close.risk_satellites is RiskLevel.CRITICAL
    assert far.risk_satellites is RiskLevel.ATTENTION
    assert far.risk_iss is RiskLevel.NONE
    assert far.risk_earth is RiskLevel.MONITOR
    assert envelope.hazardous_count == 1
    assert envelope.fetched_at == clock()


def test_get_approaches_hazardous_only():
    query = pipeline.parse_approach_query("2026-02-10", None, "true")
    envelope = pipeline.get_approaches(query, fetch=lambda q: Success(payload=neo_payload()), clock=clock)
    assert [a.name for a in envelope.approaches] == ["Far"]
    assert envelope.count == 1


def test_get_approaches_failure_serves_mock():
    query = pipeline.parse_approach_query("2026-02-10")
    envelope = pipeline.get_approaches(
        query, fetch=lambda q: Failure(kind=FailureKind.MALFORMED_RESPONSE, message="body is not JSON"), clock=clock
    )
    assert envelope.is_mock is True
    assert envelope.error_code == "MALFORMED_RESPONSE"
    assert envelope.approaches == list(mock_data.NEO_APPROACHES)


def test_empty_feed_uses_requested_range():
    query = pipeline.parse_approach_query("2026-02-10", "2026-02-12")
    envelope = pipeline.get_approaches(
        query, fetch=lambda q: Success(payload={"element_count": 0, "near_earth_objects": {}}), clock=clock
    )
    assert envelope.count == 0
    assert envelope.date_range.start == "2026-02-10"
    assert envelope.date_range.end == "2026-02-12"


def good_neo():
    return make_neo("1", "Good", approaches=[make_approach("2026-02-10", "1000", epoch=1)])


def neo_with(neo_id, **fields):
    neo = make_neo(neo_id, approaches=[make_approach("2026-02-10", "2000", epoch=2)])
    neo.update(fields)
    return neo


def approach_with(**fields):
    approach = make_approach("2026-02-10", "2000", epoch=2)
    approach.update(fields)
    return neo_with("2", close_approach_data=[approach])


def day(*records):
    return {"near_earth_objects": {"2026-02-10": [good_neo(), *records]}}


@pytest.mark.parametrize(
    "payload, expected",
    [
        (day(neo_with("2", close_approach_data=5)), 1),
        (day(neo_with("2", close_approach_data=[None, 3, "x"])), 1),
        (day(neo_with("2", estimated_diameter=7)), 1),
        (day(neo_with("2", estimated_diameter={"kilometers": {"estimated_diameter_min": 10**400}})), 1),
        (day(approach_with(epoch_date_close_approach=float("inf"))), 2),
        (day(approach_with(epoch_date_close_approach=float("nan"))), 2),
        (day(approach_with(miss_distance=[1, 2])), 1),
        (day(approach_with(relative_velocity="fast")), 1),
        (day(approach_with(close_approach_date=20260210)), 1),
        ({"near_earth_objects": {"2026-02-10": [good_neo()], "2026-02-11": "junk"}}, 1),
        ({"near_earth_objects": []}, 0),
        ({"element_count": "many"}, 0),
        ([], 0),
        (5, 0),
    ],
)
def test_malformed_neo_shapes_never_raise(payload, expected):
    query = pipeline.parse_approach_query("2026-02-10")
    envelope = pipeline.get_approaches(query, fetch=lambda q: Success(payload=payload), clock=clock)

    assert envelope.is_mock is False
    assert envelope.count == expected


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"not": "a list"}, 0),
        (5, 0),
        ("records", 0),
        ([None, 3, "x", []], 1),
        ([{"NORAD_CAT_ID": {"id": 1}}], 1),
        ([{"NORAD_CAT_ID": "2", "APOGEE": [1], "PERIGEE": {"km": 1}}], 2),
        ([{"NORAD_CAT_ID": "3", "APOGEE": 10**400, "PERIOD": float("inf")}], 2),
        ([{"NORAD_CAT_ID": "4", "DECAY_DATE": 12345, "LAUNCH_DATE": [1]}], 2),
        ([{"NORAD_CAT_ID": "5", "OBJECT_TYPE": ["PAYLOAD"], "RCS_SIZE": {"a": 1}}], 2),
        ([{1: "x", "NORAD_CAT_ID": "6"}], 2),
    ],
)
def test_malformed_satcat_shapes_never_raise(satcat_record, payload, expected):
    if isinstance(payload, list):
        payload = [satcat_record, *payload]
    envelope = pipeline.get_catalog(
        pipeline.parse_catalog_query(), fetch=lambda q: Success(payload=payload), clock=clock
    )

    assert envelope.is_mock is False
    assert envelope.count == expected
    assert sum(envelope.counts_by_type.model_dump().values()) == expected
