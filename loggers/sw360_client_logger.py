import logging
from pathlib import Path
from configuration import Configuration as Config

# Logger for the SW360 REST clients (requests, responses, failed calls)
sw360_client_logger = logging.getLogger(__name__)
sw360_client_logger.setLevel(logging.DEBUG)

Config.log_dir.mkdir(parents=True, exist_ok=True)
file_handler = logging.FileHandler(Path(Config.log_dir, "sw360_client.log"), mode='w', encoding='utf-8')
file_handler.setLevel(logging.DEBUG)

# per-request trace lines only go to the file
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)

formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
file_handler.setFormatter(formatter)
console_handler.setFormatter(formatter)

sw360_client_logger.addHandler(file_handler)
sw360_client_logger.addHandler(console_handler)
