"""Generate command for creating a default cardflow.yml."""

import logging
from pathlib import Path

import yaml

from ..models import CardflowConfig
from ..services import ConfigService
from .output import info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = ConfigService.CONFIG_FILE

# Header comments for generated file
CONFIG_HEADER = """\
# cardflow Board Configuration
#
# board:
#   default_card_count: Cards generated at startup and on reset
#   max_card_count: Largest board the settings dialog accepts (up to 50000)
#   initial_load: Cards disclosed per column before scrolling
#   load_more_chunk: Cards added to a column each time it is scrolled to the end
#   search_cap: Most results shown per column while searching
#   load_more_threshold: Rows from the bottom of a column that trigger loading more
#   card_height / card_gap: Estimated rows per card, used to size the render window
#   render_buffer: Cards rendered above and below the visible part of a column
#   titles: Column titles keyed by status (todo, inprogress, done)

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default CardflowConfig model.

    Uses CardflowConfig.default() as the single source of truth, so the
    generated file always matches internal defaults.
    """
    config_dict = CardflowConfig.default().model_dump(mode="json")
    yaml_content = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration.

    Args:
        project_root: Directory where cardflow.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    if not project_root.exists():
        project_root.mkdir(parents=True)

    config_path.write_text(generate_config_yaml())
    logger.info("Wrote %s", config_path)
    success(f"Generated config: {config_path}")
    return 0
