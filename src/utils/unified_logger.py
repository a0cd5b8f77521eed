"""
Console logging for the XHTML translator command line
"""
import sys
import os
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    ERROR = 40


class LogType(Enum):
    """Message kinds with their own console layout"""
    GENERAL = "general"
    PROGRESS = "progress"
    TRANSLATION_START = "translation_start"
    TRANSLATION_END = "translation_end"
    ERROR_DETAIL = "error_detail"


class Colors:
    """ANSI color codes for terminal output"""
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'       # Headers
    WHITE = '' if NO_COLOR else '\033[97m'        # Main text
    GRAY = '' if NO_COLOR else '\033[90m'         # Technical details
    GREEN = '' if NO_COLOR else '\033[92m'        # Success
    RED = '' if NO_COLOR else '\033[91m'          # Errors
    ENDC = '' if NO_COLOR else '\033[0m'          # Reset

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.GREEN = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Console logger for one document translation run
    """

    BAR_LENGTH = 30

    def __init__(self,
                 name: str = "XhtmlTranslator",
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO):
        self.name = name
        self.min_level = min_level
        self.start_time: Optional[datetime] = None

        if not enable_colors:
            Colors.disable()

    @staticmethod
    def _timestamp() -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _render(self, level: LogLevel, message: str, log_type: LogType, data: Dict[str, Any]) -> str:
        if log_type == LogType.PROGRESS:
            return self._render_progress(data)
        if log_type == LogType.TRANSLATION_START:
            return self._render_start(data)
        if log_type == LogType.TRANSLATION_END:
            return self._render_end(data)
        if log_type == LogType.ERROR_DETAIL:
            return self._render_error(message, data)

        color = {LogLevel.DEBUG: Colors.GRAY, LogLevel.ERROR: Colors.RED}.get(level, Colors.WHITE)
        level_str = f"[{level.name}] " if level != LogLevel.INFO else ""
        return f"{color}[{self._timestamp()}] {level_str}{message}{Colors.ENDC}"

    def _render_progress(self, data: Dict[str, Any]) -> str:
        current = data.get('current', 0)
        total = data.get('total', 0)
        percentage = (current / total * 100) if total > 0 else 100.0

        filled = int(self.BAR_LENGTH * percentage / 100)
        bar = '█' * filled + '░' * (self.BAR_LENGTH - filled)
        return f"{Colors.WHITE}[{bar}] {current}/{total} fragments ({percentage:.1f}%){Colors.ENDC}"

    def _render_start(self, data: Dict[str, Any]) -> str:
        self.start_time = datetime.now()
        lines = [
            f"{Colors.YELLOW}{'=' * 60}{Colors.ENDC}",
            f"{Colors.YELLOW}TRANSLATION STARTED{Colors.ENDC}",
        ]
        if 'input_file' in data:
            lines.append(f"{Colors.WHITE}Input: {data['input_file']}{Colors.ENDC}")
        lines.append(
            f"{Colors.WHITE}Languages: {data.get('source_lang', 'Unknown')} → "
            f"{data.get('target_lang', 'Unknown')}{Colors.ENDC}"
        )
        lines.append(f"{Colors.GRAY}Model: {data.get('model', 'Unknown')}{Colors.ENDC}")
        if 'llm_provider' in data:
            lines.append(f"{Colors.GRAY}Provider: {data['llm_provider']} ({data.get('api_endpoint', '')}){Colors.ENDC}")
        if 'concurrency' in data:
            lines.append(f"{Colors.GRAY}Concurrency: {data['concurrency']}{Colors.ENDC}")
        return '\n'.join(lines)

    def _render_end(self, data: Dict[str, Any]) -> str:
        lines = [f"\n{Colors.GREEN}TRANSLATION COMPLETE{Colors.ENDC}"]

        if 'duration' in data:
            lines.append(f"{Colors.GRAY}Duration: {data['duration']}{Colors.ENDC}")
        elif self.start_time:
            lines.append(f"{Colors.GRAY}Duration: {datetime.now() - self.start_time}{Colors.ENDC}")

        if 'fragments' in data:
            lines.append(f"{Colors.WHITE}Translated fragments: {data['fragments']}{Colors.ENDC}")
        if 'output_file' in data:
            lines.append(f"{Colors.WHITE}Output saved to: {data['output_file']}{Colors.ENDC}")
        return '\n'.join(lines)

    def _render_error(self, message: str, data: Dict[str, Any]) -> str:
        lines = [f"{Colors.RED}[{self._timestamp()}] ERROR: {message}{Colors.ENDC}"]
        if 'details' in data:
            lines.append(f"{Colors.RED}Details: {data['details']}{Colors.ENDC}")
        if 'fragment' in data:
            lines.append(f"{Colors.RED}Fragment: {data['fragment']}{Colors.ENDC}")
        return '\n'.join(lines)

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """Print a message if its level passes the threshold"""
        if level.value < self.min_level.value:
            return

        console_msg = self._render(level, message, log_type, data or {})
        try:
            print(console_msg, flush=True)
        except UnicodeEncodeError:
            # Consoles with a legacy code page (cp1252)
            print(console_msg.encode('ascii', 'replace').decode('ascii'), flush=True)

    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)

    def create_progress_callback(self, every: int = 1):
        """
        Create a callback(completed, total) that logs fragment progress

        Args:
            every: Log one line per this many completed fragments (the last one is always logged)
        """
        def progress_callback(completed: int, total: int):
            if completed == total or completed % max(every, 1) == 0:
                self.log(LogLevel.INFO, "Progress", LogType.PROGRESS, {
                    'current': completed,
                    'total': total
                })

        return progress_callback


def setup_cli_logger(enable_colors: bool = True) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    from src.config import DEBUG_MODE

    return UnifiedLogger(
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    )
