from root import get_project_root
import os
import utils
from pathlib import Path

p = Path(__file__).resolve()


class Configuration:
    # DIRECTORIES
    root_dir = get_project_root()
    input_dir = Path(root_dir, "input")
    output_dir = Path(root_dir, "output")
    log_dir = Path(root_dir, "logs")

    # PROJECT SETUP
    utils.load_env_file(Path(root_dir, ".env"))

    # SW360 PROPERTIES
    sw360_rest_url = os.getenv("SW360_REST_URL", "")
    sw360_auth_url = os.getenv("SW360_AUTH_URL", "")
    sw360_token = os.getenv("SW360_TOKEN", "")
    sw360_username = os.getenv("SW360_USERNAME", "")
    sw360_password = os.getenv("SW360_PASSWORD", "")
    sw360_client_id = os.getenv("SW360_CLIENT_ID", "")
    sw360_client_password = os.getenv("SW360_CLIENT_PASSWORD", "")
    sw360_timeout = utils.env_int("SW360_TIMEOUT", 60)
    sw360_verify_tls = utils.env_bool("SW360_VERIFY_TLS", True)
    proxies = {"http": "", "https": ""}

    # UPLOAD THROTTLING (seconds, random delay between 1 and the max before each package)
    sw360_upload_delay_max = 3

    # LICENSE REPORT OPTIONS
    option_deduplicate_dependency_tree = "deduplicateDependencyTree"
    option_dependency_network_enable = "dependencyNetwork"
    option_root_project_name = "projectName"
    option_root_project_version = "projectVersion"
    option_license_text_attachment_enable = "licenseTextAttachment"

    default_report_options = {
        option_deduplicate_dependency_tree: "false",
        option_dependency_network_enable: "false",
        option_root_project_name: "ORT_LICENSE_REPORT",
        option_root_project_version: "",
        option_license_text_attachment_enable: "true",
    }

    # LICENSE CLASSIFICATION CATEGORIES
    copyleft_license_categories = frozenset({"copyleft", "strong-copyleft", "copyleft-limited"})
    include_in_notice_file_categories = frozenset({"include-in-notice-file"})

    # FILE NAMES
    clixml_file_name_prefix = "ort-cli_"
    license_text_file_name_prefix = "ort-license-text_"
    source_archive_file_name_prefix = "ort-source-archive_"
    ort_result_file_name = "ort-result.json"
