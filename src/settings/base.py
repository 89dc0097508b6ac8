import json
import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class BaseSettings:
    """
    Base class for application settings.
    Reads values from environment variables, loading a .env file once.
    """

    # Tracks whether .env has already been loaded
    _dotenv_loaded = False

    @classmethod
    def ensure_dotenv_loaded(cls):
        """
        Make sure the .env file has been loaded (only once).
        """
        if not cls._dotenv_loaded:
            dotenv_path = os.environ.get("DOTENV_PATH")
            if dotenv_path and os.path.exists(dotenv_path):
                load_dotenv(dotenv_path=dotenv_path)
                logger.info(f"Loaded environment from file: {dotenv_path}")
            else:
                potential_paths = [".env", "../.env"]
                for path in potential_paths:
                    if os.path.exists(path):
                        load_dotenv(dotenv_path=path)
                        logger.info(f"Loaded environment from file: {path}")
                        break

            cls._dotenv_loaded = True

    @classmethod
    def get_env(
        cls, name: str, default: Any = None, required: bool = False
    ) -> Any:
        """
        Read a value from the environment.

        Args:
            name: Environment variable name
            default: Value returned when the variable is not set
            required: Raise ValueError when the variable is not set

        Returns:
            The variable's value or the default
        """
        cls.ensure_dotenv_loaded()

        value = os.environ.get(name)

        if value is None:
            if required:
                raise ValueError(
                    f"Required environment variable not found: {name}"
                )
            return default

        return value

    @classmethod
    def get_bool_env(cls, name: str, default: bool = False) -> bool:
        """
        Read a boolean from the environment.

        Args:
            name: Environment variable name
            default: Value returned when unset or unparseable

        Returns:
            bool: The parsed value
        """
        value = cls.get_env(name)
        if value is None:
            return default

        if value.lower() in ("true", "yes", "1", "t", "y"):
            return True
        elif value.lower() in ("false", "no", "0", "f", "n"):
            return False

        logger.warning(
            f"Value '{value}' for {name} is not a boolean. Using default: {default}"
        )
        return default

    @classmethod
    def get_int_env(cls, name: str, default: int = 0) -> int:
        value = cls.get_env(name)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning(
                f"Value '{value}' for {name} is not an integer. Using default: {default}"
            )
            return default

    @classmethod
    def get_float_env(cls, name: str, default: float = 0.0) -> float:
        value = cls.get_env(name)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning(
                f"Value '{value}' for {name} is not a number. Using default: {default}"
            )
            return default

    @classmethod
    def get_json_env(
        cls, name: str, default: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Read a JSON object from the environment.

        Args:
            name: Environment variable name
            default: Value returned when unset or not a JSON object

        Returns:
            Dict[str, Any]: The decoded object
        """
        default = {} if default is None else default
        value = cls.get_env(name)
        if not value:
            return default

        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(
                f"Value for {name} is not valid JSON. Using default: {default}"
            )
            return default

        if not isinstance(decoded, dict):
            logger.warning(
                f"Value for {name} is not a JSON object. Using default: {default}"
            )
            return default
        return decoded
