# rainalert

`rainalert` looks at today's hourly rain forecast for a location and, when the
chance of rain in the coming hour is high enough, publishes a push
notification to an ntfy topic. Each run performs one check, so it is meant to
be started on a schedule, for example from cron once an hour.

## How it decides

1. It fetches today's forecast from `http://api.weatherapi.com/v1/forecast.json`
   and picks the entry for the hour after the current one in the configured
   time zone. After 23:00 it looks at today's 00:00 entry. The forecast must
   hold at least one day with at least 24 hourly entries.
2. It reads thresholds from the `weather_config` table (`config`, `value`
   columns; values must be whole numbers). If the chance of rain is below
   `drizzleThreshold`, nothing is sent. A missing threshold counts as 0.
3. It looks at the most recent row (highest `id`) in `weather_notifications`.
   If that row is at most an hour old and its recorded chance of rain is above
   `rainBeforeThreshold`, the alert is skipped, so you are not notified twice
   for the same shower.
4. Otherwise it posts a notification titled `Rain Alert`, tagged
   `umbrella,robot`, to `https://ntfy.sh/<topic>`, with a message picked at
   random from a set of templates, and records the chance of rain together
   with the current Unix time.

## Installation

```
pip install rainalert
```

## Configuration

All settings come from the environment, and every one of them must be set:

| Variable                  | Meaning                                                  |
|---------------------------|----------------------------------------------------------|
| `WEATHER_API_KEY`         | key for the weather forecast API                         |
| `PUSH_NOTIFICATION_TOPIC` | ntfy topic that receives the alerts                      |
| `DB_URL`                  | path of the SQLite database file (a `file:` prefix is dropped) |
| `DB_TOKEN`                | must be present; the command does not use it             |
| `LOCATION`                | place to forecast, e.g. `London`                         |
| `TIMEZONE`                | IANA time zone name, e.g. `Europe/London`; `UTC` or empty means UTC |

The database needs two tables:

```sql
CREATE TABLE weather_config (config TEXT PRIMARY KEY, value TEXT NOT NULL);
CREATE TABLE weather_notifications (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    state INTEGER NOT NULL,
    created_at INTEGER NOT NULL
);
INSERT INTO weather_config VALUES ('drizzleThreshold', '50'), ('rainBeforeThreshold', '70');
```

## Running

```
export WEATHER_API_KEY=placeholder
export PUSH_NOTIFICATION_TOPIC=my-rain-topic
export DB_URL=/var/lib/rainalert/rain.db
export DB_TOKEN=token
export LOCATION=London
export TIMEZONE=Europe/London
rainalert
```

Progress is logged at INFO level. If a setting is missing, the database
cannot be opened or any step of the check fails, the command prints
`oh no <reason>` to standard error and exits with status 1.

## What it does not do

The `rainalert` command only works with a local SQLite database file. It does
not connect to a remote database server, and `DB_TOKEN` is read but never
used. To keep thresholds and history elsewhere, build a `Database` around
your own DB-API connection (see below).

## Using it as a library

- `rainalert.config.Config.from_env(environ=None)` builds the settings from a
  mapping (the process environment by default) and raises `ConfigError`
  naming every missing variable.
- `rainalert.weather.WeatherAPI(session, url, api_key, clock=datetime.now)`
  offers `get_next_hour_forecast(location, timezone)`, which returns the parsed
  `WeatherResponse` together with the next `Hour`, and raises `WeatherError`
  on request, status, decoding, forecast or time-zone problems.
  `WeatherResponse.from_dict(data)` builds a response from decoded JSON.
- `rainalert.database.Database(connection, clock=time.time)` wraps an
  autocommitting DB-API connection that takes `?` parameters and offers
  `get_thresholds()`, `should_notify(thresholds)` and
  `record_notification(state)`; failures raise `DatabaseError`.
- `rainalert.ntfy.NtfyClient(session, url, topic, rng=None, timeout=30.0)`
  offers `send(title, message, tags)`, which raises `NotificationError` unless
  the server answers 200 or 202, and
  `generate_rain_message(location, time_str, precip_mm, chance_of_rain)`.
- `rainalert.alert.Alerter(weather, db, ntfy).check_and_alert(location, timezone)`
  runs the whole check, returns whether a notification was sent, and raises
  `AlertError` when a step fails.
- `rainalert.cli.run(config)` does what the command does for a given `Config`;
  `rainalert.cli.main()` is the command itself and returns its exit status.

## Development

```
pip install -e ".[test]"
pytest
```