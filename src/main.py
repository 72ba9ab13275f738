"""
Fire & smoke monitor entry point.

Reads frames from a camera, stream or video file, runs heuristic fire and
smoke detection on every frame, and raises an alert once both signals
persist for the configured number of consecutive frames.

Usage:
    python src/main.py --config config/config.yaml --display

Arguments:
    --config: Path to configuration file
    --source: Camera index, stream URL or video file (overrides camera.device_id)
    --display: Show the annotated video in a window ('q' quits)
    --record: Record annotated video output
    --web: Serve detection status over HTTP
"""

import os
import sys
import argparse
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple, Union

import uvicorn
import yaml

from models.config import Config
from observation import DeviceUnavailable
from ops.logging import VALID_LOG_LEVELS, setup_logging
from pipeline.engine import create_engine_from_config
from presentation.presenters import DisplayPresenter, Presenter, RecordingPresenter, WebStatePresenter
from web.app import create_app
from web.state import state as web_state


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        # Finally apply explicit config_path if it's not one of the layered files
        layered = {os.path.abspath(base_path), os.path.abspath(local_overrides_path)}
        if os.path.exists(config_path) and os.path.abspath(config_path) not in layered:
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_positive_int(value: Any) -> bool:
    return _is_non_negative_int(value) and value > 0


def _validate_hsv(section: str, key: str, value: Any) -> Optional[str]:
    if not isinstance(value, list) or len(value) != 3:
        return f"{section}.{key} must be a list of [h, s, v]"
    h, s, v = value
    if not all(_is_non_negative_int(x) for x in value):
        return f"{section}.{key} values must be non-negative integers"
    if h > 179 or s > 255 or v > 255:
        return f"{section}.{key} out of range (h<=179, s<=255, v<=255)"
    return None


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'fire', 'smoke', 'alert', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Camera
    camera = config.get('camera') or {}
    if 'device_id' not in camera:
        return False, "Missing camera.device_id"
    device_id = camera['device_id']
    if isinstance(device_id, bool) or not isinstance(device_id, (int, str)):
        return False, "camera.device_id must be an integer (index) or string (URL/path)"
    if isinstance(device_id, int) and device_id < 0:
        return False, "camera.device_id integer must be non-negative"
    if 'max_device_index' in camera and not _is_positive_int(camera['max_device_index']):
        return False, "camera.max_device_index must be a positive integer"
    if 'max_retries' in camera and not _is_positive_int(camera['max_retries']):
        return False, "camera.max_retries must be a positive integer"
    resolution = camera.get('resolution')
    if resolution is not None:
        if not isinstance(resolution, list) or len(resolution) != 2:
            return False, "camera.resolution must be a list of [width, height]"
        if not all(_is_positive_int(x) for x in resolution):
            return False, "camera.resolution values must be positive integers"
    fps = camera.get('fps')
    if fps is not None and not _is_positive_int(fps):
        return False, "camera.fps must be a positive integer"

    # Fire / smoke detectors
    for section in ('fire', 'smoke'):
        cfg = config.get(section) or {}
        for key in ('hsv_lower', 'hsv_upper'):
            if key in cfg:
                error = _validate_hsv(section, key, cfg[key])
                if error:
                    return False, error
        if 'kernel_size' in cfg and not _is_positive_int(cfg['kernel_size']):
            return False, f"{section}.kernel_size must be a positive integer"
        if 'detection_threshold' in cfg and not _is_non_negative_int(cfg['detection_threshold']):
            return False, f"{section}.detection_threshold must be a non-negative integer"

    fire = config.get('fire') or {}
    if 'growth_threshold' in fire and not _is_non_negative_int(fire['growth_threshold']):
        return False, "fire.growth_threshold must be a non-negative integer"
    if 'intensity_threshold' in fire:
        it = fire['intensity_threshold']
        if not _is_non_negative_int(it) or it > 255:
            return False, "fire.intensity_threshold must be between 0 and 255"

    smoke = config.get('smoke') or {}
    if 'motion_threshold' in smoke:
        mt = smoke['motion_threshold']
        if not _is_non_negative_int(mt) or mt > 255:
            return False, "smoke.motion_threshold must be between 0 and 255"

    # Alert
    alert = config.get('alert') or {}
    for key in ('history_window_size', 'fire_streak_required', 'smoke_streak_required'):
        if key in alert and not _is_positive_int(alert[key]):
            return False, f"alert.{key} must be a positive integer"

    # Web
    web = config.get('web') or {}
    if 'port' in web:
        port = web['port']
        if not _is_positive_int(port) or port > 65535:
            return False, "web.port must be between 1 and 65535"

    # Logging
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"

    return True, None


def parse_source(value: str) -> Union[int, str]:
    """Camera indices arrive as strings on the command line."""
    return int(value) if value.isdigit() else value


def start_web_server(config: Config) -> threading.Thread:
    def run_web_app():
        uvicorn.run(
            create_app(),
            host=config.web.host,
            port=config.web.port,
            log_level="warning",
        )

    web_thread = threading.Thread(target=run_web_app, daemon=True)
    web_thread.start()
    logging.info(f"Web interface started on port {config.web.port}")
    return web_thread


def build_presenters(config: Config, display: bool, record: bool) -> List[Presenter]:
    presenters: List[Presenter] = []
    if display:
        presenters.append(DisplayPresenter())
    if record:
        presenters.append(RecordingPresenter(fps=config.camera.fps or 30))
    if config.web.enabled:
        web_state.reset()
        presenters.append(WebStatePresenter(web_state))
    return presenters


def main():
    """Main application function."""
    parser = argparse.ArgumentParser(description='Fire & Smoke Monitor')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--source', type=str, default=None,
                        help='Camera index, stream URL or video file')
    parser.add_argument('--display', action='store_true',
                        help='Enable visual display')
    parser.add_argument('--record', action='store_true',
                        help='Record video output')
    parser.add_argument('--web', action='store_true',
                        help='Serve detection status over HTTP')
    args = parser.parse_args()

    config_dict = load_config(args.config)
    if args.source is not None:
        config_dict.setdefault('camera', {})['device_id'] = parse_source(args.source)
    if args.web:
        config_dict.setdefault('web', {})['enabled'] = True

    is_valid, error_msg = validate_config(config_dict)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config_dict['log_path'], config_dict['log_level'])
    config = Config.from_dict(config_dict)

    logging.info("Starting Fire & Smoke Monitor")
    logging.info(
        f"Thresholds: fire_area>{config.fire.detection_threshold}, "
        f"growth>{config.fire.growth_threshold}, smoke_area>{config.smoke.detection_threshold}, "
        f"window={config.alert.history_window_size}, "
        f"streaks={config.alert.fire_streak_required}/{config.alert.smoke_streak_required}"
    )

    if config.web.enabled:
        start_web_server(config)

    engine = create_engine_from_config(config, build_presenters(config, args.display, args.record))

    try:
        engine.run()
    except DeviceUnavailable as e:
        logging.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
