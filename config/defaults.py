from config.schema import (
    AppConfig,
    LifecycleConfig,
    LoggingConfig,
    NamingConfig,
)

# Klassencodes des Backends → Anzeigename
DEFAULT_CLASS_CODES: dict[str, str] = {
    "1234": "CS23-1",
    "2005": "CS23-2",
    "1111": "CS23-3",
    "8888": "CS-KI",
}


def default_naming() -> NamingConfig:
    return NamingConfig(separator="-", class_codes=dict(DEFAULT_CLASS_CODES))


def default_app_config() -> AppConfig:
    """Standard: 3 Tage Kulanz, 1 Tag Nachfrist, Neubewertung jede Sekunde."""
    return AppConfig(
        lifecycle=LifecycleConfig(
            grace_period_days=3,
            late_submission_days=1,
            refresh_interval_seconds=1.0,
        ),
        naming=default_naming(),
        logging=LoggingConfig(),
    )
