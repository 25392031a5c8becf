from datetime import datetime, timezone

import pytest
import requests
import responses
from responses import matchers

from rainalert.weather import Hour, WeatherAPI, WeatherError, WeatherResponse

URL = "http://test.com"


def empty_hour():
    return {"time": "", "precip_mm": 0, "will_it_rain": 0, "chance_of_rain": 0}


def forecast_body(hours=None):
    if hours is None:
        hours = [empty_hour() for _ in range(24)]
    return {
        "location": {"name": "Test Location", "tz_id": "UTC", "localtime": ""},
        "forecast": {"forecastday": [{"date": "2025-07-10", "hour": hours}]},
    }


def clock_at(hour):
    return lambda tz: datetime(2025, 7, 10, hour, 15, tzinfo=timezone.utc).astimezone(tz)


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def make_api(hour=12):
    return WeatherAPI(requests.Session(), URL, "placeholder", clock=clock_at(hour))


def test_successful_forecast_retrieval(rsps):
    hours = [empty_hour() for _ in range(24)]
    hours[13]["chance_of_rain"] = 80
    rsps.add(responses.GET, URL, json=forecast_body(hours))

    weather, hour = make_api(12).get_next_hour_forecast("Test Location", "UTC")

    assert hour.chance_of_rain == 80
    assert weather.location_name == "Test Location"


def test_real_clock_picks_next_hour(rsps):
    hours = [dict(empty_hour(), chance_of_rain=80) for _ in range(24)]
    rsps.add(responses.GET, URL, json=forecast_body(hours))
    api = WeatherAPI(requests.Session(), URL, "placeholder")

    _, hour = api.get_next_hour_forecast("Test Location", "UTC")

    assert hour.chance_of_rain == 80


def test_request_parameters_and_user_agent(rsps):
    rsps.add(
        responses.GET,
        URL,
        json=forecast_body(),
        match=[
            matchers.query_param_matcher(
                {"key": "placeholder", "q": "Test Location", "days": "1", "aqi": "no", "alerts": "no"}
            )
        ],
    )

    weather, hour = make_api().get_next_hour_forecast("Test Location", "UTC")

    assert hour == Hour()
    assert weather.location_name == "Test Location"
    assert len(rsps.calls) == 1
    assert rsps.calls[0].request.headers["User-Agent"] == "rain-alert/1.0"


def test_hour_23_wraps_to_midnight(rsps):
    hours = [empty_hour() for _ in range(24)]
    hours[0]["chance_of_rain"] = 55
    hours[0]["time"] = "2025-07-10 00:00"
    rsps.add(responses.GET, URL, json=forecast_body(hours))

    _, hour = make_api(23).get_next_hour_forecast("Test Location", "UTC")

    assert hour == Hour(time="2025-07-10 00:00", chance_of_rain=55)


def test_weather_api_error(rsps):
    rsps.add(responses.GET, URL, body=requests.ConnectionError("API error"))
    with pytest.raises(WeatherError, match="making request"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_unexpected_status(rsps):
    rsps.add(responses.GET, URL, status=500, body="boom")
    with pytest.raises(WeatherError, match="unexpected response: 500"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_invalid_json(rsps):
    rsps.add(responses.GET, URL, body="not json")
    with pytest.raises(WeatherError, match="decoding response"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_mistyped_field(rsps):
    hours = [empty_hour() for _ in range(24)]
    hours[3]["chance_of_rain"] = "high"
    rsps.add(responses.GET, URL, json=forecast_body(hours))
    with pytest.raises(WeatherError, match="decoding response"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_no_forecast_days(rsps):
    rsps.add(responses.GET, URL, json={"forecast": {"forecastday": []}})
    with pytest.raises(WeatherError, match="no forecast days found"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_incomplete_hours(rsps):
    rsps.add(responses.GET, URL, json=forecast_body([empty_hour() for _ in range(23)]))
    with pytest.raises(WeatherError, match="hourly forecast incomplete"):
        make_api().get_next_hour_forecast("Test Location", "UTC")


def test_invalid_timezone(rsps):
    rsps.add(responses.GET, URL, json=forecast_body())
    with pytest.raises(WeatherError, match="invalid timezone"):
        make_api().get_next_hour_forecast("Test Location", "Not/AZone")


def test_from_dict_defaults_missing_fields():
    weather = WeatherResponse.from_dict(
        {"location": {"name": "Madrid"}, "forecast": {"forecastday": [{"hour": [{"precip_mm": 2}]}]}}
    )
    assert weather.location_name == "Madrid"
    assert weather.tz_id == ""
    assert weather.forecast_days[0].hours == [Hour(precip_mm=2.0)]


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        WeatherResponse.from_dict([1, 2])