from cli import cli
from config.settings import settings
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Run Entry Point")


def main():
    configure_logging(settings.app.log_file, settings.app.effective_log_level)
    logger.debug(f"Starting {settings.app.name}")
    cli()


if __name__ == "__main__":
    main()
