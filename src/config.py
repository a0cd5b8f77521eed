"""
Centralized configuration class
"""
import os
import math
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, FrozenSet
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)

# Get config directory (current working directory)
_config_dir = Path.cwd()
_env_file = _config_dir / '.env'

if not _env_file.exists():
    _config_logger.info(
        ".env not found in %s - using environment variables and built-in defaults", _config_dir
    )

# Load .env file if it exists (existing environment variables win)
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"load_dotenv() returned: {_dotenv_result} for {_env_file.absolute()}")


def _parse_request_timeout(value, default: float) -> float:
    """Parse the per-request deadline in seconds; missing or zero keeps the server default."""
    if not value:
        return default
    if isinstance(value, bool):
        raise ValueError(f"timeout must be a number of seconds, got {value!r}")
    timeout = float(value)
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be a positive number of seconds, got {value!r}")
    return timeout


def _parse_tag_list(raw: str) -> FrozenSet[str]:
    """Parse a comma separated tag list into a normalized set of local tag names."""
    return frozenset(tag.strip().lower() for tag in raw.split(',') if tag.strip())


# Load from environment variables with defaults
OLLAMA_DEFAULT_ENDPOINT = 'http://localhost:11434/api/generate'
API_ENDPOINT = os.getenv('API_ENDPOINT', OLLAMA_DEFAULT_ENDPOINT)
DEFAULT_MODEL = os.getenv('DEFAULT_MODEL', 'google/translategemma-4b-it')
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'ollama')  # 'ollama' or 'openai'
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_API_ENDPOINT = 'https://api.openai.com/v1/chat/completions'

PORT = int(os.getenv('PORT', '8090'))
HOST = os.getenv('HOST', '127.0.0.1')

# Per-request timeout for a single fragment translation call (seconds)
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '60'))
# Deadline for a whole document translation (seconds)
TRANSLATION_TIMEOUT = int(os.getenv('TRANSLATION_TIMEOUT', '300'))
# Maximum number of fragment translations in flight at once
MAX_CONCURRENT_TRANSLATIONS = int(os.getenv('MAX_CONCURRENT_TRANSLATIONS', '5'))

# Elements whose direct text is never sent to the LLM
NON_TRANSLATABLE_TAGS = _parse_tag_list(os.getenv('NON_TRANSLATABLE_TAGS', 'script,style'))

# Default languages from environment
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'English')
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', 'Spanish')

# LLM sampling temperature (low for focused output)
LLM_TEMPERATURE = float(os.getenv('LLM_TEMPERATURE', '0.1'))

# Debug mode (reload after .env is loaded)
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'


def _mask_secret(value: str) -> str:
    return '***' + value[-4:] if value else '(not set)'


# Log loaded configuration in debug mode
if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug(f"   API_ENDPOINT: {API_ENDPOINT}")
    _config_logger.debug(f"   DEFAULT_MODEL: {DEFAULT_MODEL}")
    _config_logger.debug(f"   LLM_PROVIDER: {LLM_PROVIDER}")
    _config_logger.debug(f"   PORT: {PORT}")
    _config_logger.debug(f"   HOST: {HOST}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   TRANSLATION_TIMEOUT: {TRANSLATION_TIMEOUT}")
    _config_logger.debug(f"   MAX_CONCURRENT_TRANSLATIONS: {MAX_CONCURRENT_TRANSLATIONS}")
    _config_logger.debug(f"   NON_TRANSLATABLE_TAGS: {sorted(NON_TRANSLATABLE_TAGS)}")
    _config_logger.debug(f"   OPENAI_API_KEY: {_mask_secret(OPENAI_API_KEY)}")
    _config_logger.debug("=" * 60)


@dataclass
class TranslationConfig:
    """Unified configuration for both CLI and web interfaces"""

    # Core settings
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE
    model: str = DEFAULT_MODEL
    api_endpoint: str = API_ENDPOINT

    # LLM Provider settings
    llm_provider: str = LLM_PROVIDER
    openai_api_key: str = OPENAI_API_KEY

    # LLM parameters
    request_timeout: int = REQUEST_TIMEOUT
    temperature: float = LLM_TEMPERATURE

    # Document translation parameters
    max_concurrency: int = MAX_CONCURRENT_TRANSLATIONS
    translation_timeout: float = TRANSLATION_TIMEOUT
    non_translatable_tags: FrozenSet[str] = field(default_factory=lambda: NON_TRANSLATABLE_TAGS)

    # Interface-specific
    interface_type: str = "cli"  # or "web"
    enable_colors: bool = True

    @classmethod
    def from_cli_args(cls, args) -> 'TranslationConfig':
        """Create config from CLI arguments"""
        return cls(
            source_language=args.source_lang,
            target_language=args.target_lang,
            model=args.model,
            api_endpoint=args.api_endpoint,
            llm_provider=getattr(args, 'provider', LLM_PROVIDER),
            openai_api_key=getattr(args, 'openai_api_key', OPENAI_API_KEY),
            max_concurrency=getattr(args, 'concurrency', MAX_CONCURRENT_TRANSLATIONS),
            translation_timeout=getattr(args, 'timeout', TRANSLATION_TIMEOUT),
            interface_type="cli",
            enable_colors=not getattr(args, 'no_color', False),
        )

    @classmethod
    def from_web_request(cls, request_data: dict, base: Optional['TranslationConfig'] = None) -> 'TranslationConfig':
        """Create config from web request data, falling back to the server's settings"""
        base = base or cls(interface_type="web")
        return cls(
            source_language=request_data.get('source_lang', base.source_language),
            target_language=request_data.get('target_lang', base.target_language),
            model=request_data.get('model') or base.model,
            api_endpoint=base.api_endpoint,
            llm_provider=base.llm_provider,
            openai_api_key=base.openai_api_key,
            request_timeout=base.request_timeout,
            temperature=base.temperature,
            max_concurrency=base.max_concurrency,
            translation_timeout=_parse_request_timeout(request_data.get('timeout'), base.translation_timeout),
            non_translatable_tags=base.non_translatable_tags,
            interface_type="web",
            enable_colors=False,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (API key masked)"""
        return {
            'source_language': self.source_language,
            'target_language': self.target_language,
            'model': self.model,
            'api_endpoint': self.api_endpoint,
            'llm_provider': self.llm_provider,
            'openai_api_key': _mask_secret(self.openai_api_key),
            'request_timeout': self.request_timeout,
            'temperature': self.temperature,
            'max_concurrency': self.max_concurrency,
            'translation_timeout': self.translation_timeout,
            'non_translatable_tags': sorted(self.non_translatable_tags),
        }
