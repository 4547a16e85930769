"""
Handler configuration, read from the Lambda environment once per invocation
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://cloud.mongodb.com/"
DEFAULT_PROFILE = "default"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT = 30.0
USER_AGENT_PREFIX = "mongodbatlas-cloudformation-resources"


@dataclass(frozen=True)
class HandlerConfig:
    """
    Settings shared by every operation of a handler invocation.

    Built by the entry-point handler and passed down explicitly, so operation functions never reach into the
    process environment themselves.
    """
    type_name: str
    log_level: str = DEFAULT_LOG_LEVEL
    base_url: str = DEFAULT_BASE_URL
    profile_name: str = DEFAULT_PROFILE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def user_agent(self) -> str:
        return f"{USER_AGENT_PREFIX}/{self.type_name}"

    @classmethod
    def from_env(cls, type_name: str, environ: Optional[Mapping[str, str]] = None) -> "HandlerConfig":
        """
        Builds a config from environment variables

        :param type_name: CloudFormation type name of the calling resource
        :param environ: Mapping to read from. Defaults to `os.environ`
        :return HandlerConfig:
        """
        env = os.environ if environ is None else environ
        timeout = env.get("MONGODB_ATLAS_REQUEST_TIMEOUT")
        try:
            request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError:
            raise AttributeError(f"MONGODB_ATLAS_REQUEST_TIMEOUT must be a number of seconds, got {timeout!r}")
        log_level = (env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = DEFAULT_LOG_LEVEL
        return cls(
            type_name=type_name,
            log_level=log_level,
            base_url=env.get("MONGODB_ATLAS_BASE_URL") or DEFAULT_BASE_URL,
            profile_name=env.get("MONGODB_ATLAS_PROFILE") or DEFAULT_PROFILE,
            request_timeout=request_timeout,
        )
