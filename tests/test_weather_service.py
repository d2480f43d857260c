import datetime as dt
import threading
import unittest

from app.config import Settings
from app.errors import CityNotFoundError, UpstreamError
from app.models import (
    CITY_NOT_FOUND_MESSAGE,
    UPSTREAM_ERROR_MESSAGE,
    AirQuality,
    Coordinates,
    CurrentConditions,
    ForecastEntry,
    RequestState,
)
from app.weather_service import WeatherRequestHandler, format_number

LONDON = Coordinates(latitude=51.5073, longitude=-0.1276)


class FakeGeocoder:
    def __init__(self, coords=LONDON, exc=None):
        self.coords = coords
        self.exc = exc
        self.calls = []

    def resolve(self, city_name):
        self.calls.append(city_name)
        if self.exc:
            raise self.exc
        return self.coords


class FakeWeather:
    def __init__(self, *, current_temp=15.3, fail_on=None, exc=None):
        self.current_temp = current_temp
        self.fail_on = fail_on
        self.exc = exc or UpstreamError("openweathermap", "Internal error", status_code=500)
        self.calls = []
        self._lock = threading.Lock()

    def _record(self, name, coords):
        with self._lock:
            self.calls.append((name, coords))
        if self.fail_on == name:
            raise self.exc

    def get_current(self, coords):
        self._record("current", coords)
        return CurrentConditions(description="light rain", temperature_celsius=self.current_temp, humidity_percent=60)

    def get_forecast(self, coords):
        self._record("forecast", coords)
        start = dt.datetime(2024, 1, 1, 0, 0, tzinfo=dt.timezone.utc)
        return [
            ForecastEntry(start + dt.timedelta(hours=3 * i), 8.5 + i, 70 + i, "10d")
            for i in range(40)
        ]

    def get_air_quality(self, coords):
        self._record("air_quality", coords)
        return AirQuality(index=3, components={"pm2_5": 12.1})


def _settings():
    return Settings(_env_file=None, geocoding_api_key="g", weather_api_key="w", display_timezone="Asia/Kolkata")


class TestWeatherRequestHandler(unittest.TestCase):
    def test_success_builds_full_page(self):
        weather = FakeWeather()
        page = WeatherRequestHandler(FakeGeocoder(), weather, _settings()).handle("London")

        self.assertIsNone(page.error)
        self.assertEqual(page.state, RequestState.RENDERED)
        self.assertEqual(page.weather, "Weather in London: light rain")
        self.assertEqual(page.current_temperature, "15.3°C")
        self.assertEqual(page.current_humidity, "60%")
        self.assertEqual(len(page.hourly_forecast), 8)
        self.assertEqual(len(page.weekly_forecast), 5)
        self.assertEqual(page.hourly_forecast[0].local_time, "05:30")
        self.assertEqual(page.hourly_forecast[0].temperature_celsius, 9)
        self.assertEqual(page.air_quality.index, 3)
        self.assertEqual(
            sorted(name for name, _ in weather.calls),
            ["air_quality", "current", "forecast"],
        )
        self.assertTrue(all(coords == LONDON for _, coords in weather.calls))

    def test_integral_temperature_has_no_trailing_zero(self):
        page = WeatherRequestHandler(FakeGeocoder(), FakeWeather(current_temp=15.0), _settings()).handle("London")
        self.assertEqual(page.current_temperature, "15°C")

    def test_city_not_found(self):
        weather = FakeWeather()
        geocoder = FakeGeocoder(exc=CityNotFoundError("Atlantis"))
        page = WeatherRequestHandler(geocoder, weather, _settings()).handle("Atlantis")

        self.assertEqual(page.error, CITY_NOT_FOUND_MESSAGE)
        self.assertEqual(page.state, RequestState.ERROR)
        self.assertIsNone(page.weather)
        self.assertIsNone(page.current_temperature)
        self.assertIsNone(page.current_humidity)
        self.assertIsNone(page.air_quality)
        self.assertEqual(page.hourly_forecast, [])
        self.assertEqual(page.weekly_forecast, [])
        self.assertEqual(weather.calls, [])

    def test_geocoding_upstream_error(self):
        geocoder = FakeGeocoder(exc=UpstreamError("opencage", "quota exceeded", status_code=402))
        page = WeatherRequestHandler(geocoder, FakeWeather(), _settings()).handle("London")
        self.assertEqual(page.error, UPSTREAM_ERROR_MESSAGE)
        self.assertIsNone(page.weather)

    def test_any_weather_failure_discards_everything(self):
        for failing in ("current", "forecast", "air_quality"):
            with self.subTest(failing=failing):
                page = WeatherRequestHandler(FakeGeocoder(), FakeWeather(fail_on=failing), _settings()).handle("London")
                self.assertEqual(page.error, UPSTREAM_ERROR_MESSAGE)
                self.assertIsNone(page.weather)
                self.assertIsNone(page.current_temperature)
                self.assertIsNone(page.current_humidity)
                self.assertIsNone(page.air_quality)
                self.assertEqual(page.hourly_forecast, [])
                self.assertEqual(page.weekly_forecast, [])

    def test_unexpected_exception_uses_generic_message(self):
        weather = FakeWeather(fail_on="forecast", exc=RuntimeError("boom"))
        page = WeatherRequestHandler(FakeGeocoder(), weather, _settings()).handle("London")
        self.assertEqual(page.error, UPSTREAM_ERROR_MESSAGE)
        self.assertNotIn("boom", page.error)

    def test_blank_city_skips_providers(self):
        geocoder = FakeGeocoder()
        page = WeatherRequestHandler(geocoder, FakeWeather(), _settings()).handle("   ")
        self.assertEqual(page.error, CITY_NOT_FOUND_MESSAGE)
        self.assertEqual(geocoder.calls, [])

    def test_city_is_stripped(self):
        geocoder = FakeGeocoder()
        page = WeatherRequestHandler(geocoder, FakeWeather(), _settings()).handle("  London ")
        self.assertEqual(geocoder.calls, ["London"])
        self.assertEqual(page.weather, "Weather in London: light rain")


class TestFormatNumber(unittest.TestCase):
    def test_format_number(self):
        self.assertEqual(format_number(15.3), "15.3")
        self.assertEqual(format_number(15.0), "15")
        self.assertEqual(format_number(-0.5), "-0.5")
        self.assertEqual(format_number(7), "7")


if __name__ == "__main__":
    unittest.main()
