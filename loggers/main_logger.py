import logging
from pathlib import Path
from configuration import Configuration as Config

# Logger for the command line entry point (run options, timing, final status)
main_logger = logging.getLogger("sw360_license_report")
main_logger.setLevel(logging.DEBUG)

Config.log_dir.mkdir(parents=True, exist_ok=True)
file_handler = logging.FileHandler(Path(Config.log_dir, "sw360_license_report.log"), mode='w', encoding='utf-8')
file_handler.setLevel(logging.INFO)

console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)

formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
file_handler.setFormatter(formatter)
console_handler.setFormatter(formatter)

main_logger.addHandler(file_handler)
main_logger.addHandler(console_handler)
