import logging
from pathlib import Path
from configuration import Configuration as Config

p = Path(__file__).resolve()

# Create a custom logger
sw360_sync_logger = logging.getLogger(__name__)
sw360_sync_logger.setLevel(logging.DEBUG)  # Set the minimum logging level

# Create handlers for file and console
Config.log_dir.mkdir(parents=True, exist_ok=True)
file_handler_path = Path(Config.log_dir, "sw360_sync.log")
file_handler = logging.FileHandler(file_handler_path, mode='w', encoding='utf-8')
console_handler = logging.StreamHandler()

# Set the logging level for each handler
file_handler.setLevel(logging.INFO)
console_handler.setLevel(logging.DEBUG)

# Create a logging format
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
file_handler.setFormatter(formatter)
console_handler.setFormatter(formatter)

# Add the handlers to the logger
sw360_sync_logger.addHandler(file_handler)
sw360_sync_logger.addHandler(console_handler)
