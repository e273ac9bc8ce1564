import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import dotenv

current_dir = Path(__file__).parent.absolute()

DEFAULT_USER_AGENT = "Cordlink/0.1.0"


def load_env(env_path=None):
    env_file = env_path or os.getenv("CORDLINK_ENV_FILE", current_dir.parent.joinpath(".env"))
    dotenv.load_dotenv(env_file)


def load_env_variable(key, default_value=None, none_allowed=False):
    v = os.getenv(key, default=default_value)
    if v is not None:
        v = v.strip() or default_value
    if v is None and not none_allowed:
        raise RuntimeError(f"{key} returned {v} but this is not allowed!")
    return v


@dataclass(frozen=True)
class EnvCredentials:
    token: Optional[str]
    username: Optional[str]
    password: Optional[str]
    mfa_code: Optional[str]
    user_agent: str


def load_credentials(env_path=None) -> EnvCredentials:
    load_env(env_path)
    return EnvCredentials(
        token=load_env_variable("CORDLINK_TOKEN", none_allowed=True),
        username=load_env_variable("CORDLINK_USERNAME", none_allowed=True),
        password=load_env_variable("CORDLINK_PASSWORD", none_allowed=True),
        mfa_code=load_env_variable("CORDLINK_MFA_CODE", none_allowed=True),
        user_agent=load_env_variable("CORDLINK_USER_AGENT", default_value=DEFAULT_USER_AGENT),
    )
