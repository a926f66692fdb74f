import logging
import sys

from config.settings import settings
from gagbot.core import GagBot

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the bot."""
    try:
        logger.info("Initializing GaGBOT...")

        if "--dev" in sys.argv[1:]:
            settings.environment = "development"
            settings.debug = True

        bot = GagBot()
        bot.run()

    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
