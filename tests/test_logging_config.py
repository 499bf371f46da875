from eventradar.config import Settings
from eventradar.logging_config import configure_logging, get_logger


def test_sql_logging_follows_debug(tmp_path):
    debug = configure_logging(Settings(DEBUG=True, LOG_DIR=str(tmp_path)))
    quiet = configure_logging(Settings(DEBUG=False, LOG_DIR=str(tmp_path)))

    assert debug["loggers"]["sqlalchemy.engine"]["level"] == "INFO"
    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"


def test_only_application_loggers_are_configured(tmp_path):
    config = configure_logging(Settings(LOG_DIR=str(tmp_path)))

    assert set(config["loggers"]) == {"eventradar", "sqlalchemy.engine"}


def test_log_directory_is_created(tmp_path):
    log_dir = tmp_path / "nested" / "logs"

    config = configure_logging(Settings(LOG_DIR=str(log_dir)))

    assert log_dir.is_dir()
    assert config["handlers"]["file"]["filename"] == log_dir / "eventradar.log"


def test_get_logger_is_namespaced():
    assert get_logger("services.geo").name == "eventradar.services.geo"
