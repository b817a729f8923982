"""
Centralized configuration
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("DEBUG_MODE enabled - verbose logging active")

_env_file = Path.cwd() / '.env'

if _debug_mode:
    _config_logger.debug(f"Looking for .env at: {_env_file.absolute()}")
    _config_logger.debug(f".env exists: {_env_file.exists()}")

# Load .env file if it exists
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"load_dotenv() returned: {_dotenv_result}")

# Browser session id sent with the split call. The web endpoint expects one.
_DEFAULT_LMTBID = "58c81157-360a-47f5-bdfb-40809d9645e9|d2551197821fc62516f3164c867a96f1"

# Load from environment variables with defaults
API_ENDPOINT = os.getenv('DEEPL_API_ENDPOINT', 'https://www2.deepl.com/jsonrpc')
LMTBID = os.getenv('DEEPL_LMTBID', _DEFAULT_LMTBID)
JSONRPC_VERSION = os.getenv('JSONRPC_VERSION', '2.0')
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '30'))
USER_PREFERRED_LANGS = [
    lang.strip() for lang in os.getenv('USER_PREFERRED_LANGS', 'ZH,EN').split(',') if lang.strip()
]

# Text-to-speech URL builder
SPEECH_ENDPOINT = os.getenv('SPEECH_ENDPOINT', 'http://tts.baidu.com/text2audio')
SPEECH_SPEED = 5
# Spoken language used when the caller passes "auto"
SPEECH_DEFAULT_LANGUAGE = "zh-CN"
SPEECH_FALLBACK_CODE = "zh"

# Default languages from environment
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'auto')
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', 'zh-CN')

# JSON-RPC protocol constants
SPLIT_METHOD = "LMT_split_into_sentences"
TRANSLATE_METHOD = "LMT_handle_jobs"
JOB_PRIORITY = 1
# Beam width requested per job: one guess when neighbouring sentences give
# context, several candidates when the text is sent alone.
BEAMS_WITH_CONTEXT = 1
BEAMS_WITHOUT_CONTEXT = 4

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_3) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/80.0.3987.149 Safari/537.36"
)

# Debug mode (reload after .env is loaded)
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

# Log loaded configuration in debug mode
if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("="*60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug("="*60)
    _config_logger.debug(f"   DEEPL_API_ENDPOINT: {API_ENDPOINT}")
    _config_logger.debug(f"   DEEPL_LMTBID: {'***' + LMTBID[-4:] if LMTBID else '(not set)'}")
    _config_logger.debug(f"   JSONRPC_VERSION: {JSONRPC_VERSION}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   USER_PREFERRED_LANGS: {USER_PREFERRED_LANGS}")
    _config_logger.debug(f"   SPEECH_ENDPOINT: {SPEECH_ENDPOINT}")
    _config_logger.debug(f"   DEFAULT_SOURCE_LANGUAGE: {DEFAULT_SOURCE_LANGUAGE}")
    _config_logger.debug(f"   DEFAULT_TARGET_LANGUAGE: {DEFAULT_TARGET_LANGUAGE}")
    _config_logger.debug("="*60)


@dataclass
class DeepLConfig:
    """Per-call configuration for the DeepL provider"""

    jsonrpc: str = JSONRPC_VERSION
    lmtbid: Optional[str] = None  # falls back to LMTBID when unset

    @property
    def session_cookie(self) -> str:
        return f"LMTBID={self.lmtbid or LMTBID}"

    @classmethod
    def from_cli_args(cls, args) -> 'DeepLConfig':
        """Create config from CLI arguments"""
        return cls(
            jsonrpc=getattr(args, 'jsonrpc', None) or JSONRPC_VERSION,
            lmtbid=getattr(args, 'lmtbid', None),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'DeepLConfig':
        """Create config from a plain mapping (e.g. a request body)"""
        return cls(
            jsonrpc=data.get('jsonrpc') or JSONRPC_VERSION,
            lmtbid=data.get('lmtbid'),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'jsonrpc': self.jsonrpc,
            'lmtbid': self.lmtbid,
        }
