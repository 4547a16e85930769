"""
Atlas credential profiles stored in AWS Secrets Manager

A profile is a secret named `cfn/atlas/profile/<name>` holding JSON:

    {"PublicKey": "...", "PrivateKey": "...", "BaseUrl": "https://cloud.mongodb.com/"}

`BaseUrl` is optional.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional

from botocore.exceptions import ClientError
from cloudformation_cli_python_lib import SessionProxy

from .atlas import AtlasClient, client_from_keys
from .config import HandlerConfig

LOG = logging.getLogger(__name__)

PROFILE_SECRET_PREFIX = "cfn/atlas/profile/"


class ProfileError(Exception):
    """Raised when a profile can not be read or is incomplete"""


@dataclass
class Profile:
    name: str
    public_key: str
    private_key: str
    base_url: Optional[str] = None


def secret_name(profile_name: str) -> str:
    return f"{PROFILE_SECRET_PREFIX}{profile_name}"


def resolve_profile_name(profile_name: Optional[str], config: HandlerConfig) -> str:
    if profile_name and profile_name.strip():
        return profile_name
    return config.profile_name


def load_profile(session: Optional[SessionProxy], profile_name: str) -> Profile:
    """
    Reads a profile from Secrets Manager

    :param session: Boto SessionProxy
    :param profile_name: Name of the profile (without the secret prefix)
    :return Profile:
    """
    if session is None:
        raise ProfileError("No AWS session available to read the Atlas profile. Check the handler execution role")
    secrets = session.client('secretsmanager')
    name = secret_name(profile_name)
    LOG.debug('Fetching Atlas profile from Secrets Manager at %s', name)
    try:
        secret = secrets.get_secret_value(SecretId=name)
    except ClientError as e:
        raise ProfileError(f"Unable to read profile {profile_name} from secret {name}: {e}") from e
    try:
        data = json.loads(secret['SecretString'])
    except (KeyError, TypeError, ValueError) as e:
        raise ProfileError(f"Secret {name} does not contain a JSON profile") from e

    public_key = data.get('PublicKey')
    private_key = data.get('PrivateKey')
    if not public_key or not private_key:
        raise ProfileError(f"Profile {profile_name} must define both PublicKey and PrivateKey")
    return Profile(name=profile_name, public_key=public_key, private_key=private_key,
                   base_url=data.get('BaseUrl'))


def client_from_profile(session: Optional[SessionProxy], profile_name: str, config: HandlerConfig) -> AtlasClient:
    """
    Builds an Atlas client from the keys stored in a profile

    :param session: Boto SessionProxy
    :param profile_name: Profile name, already resolved to a non-empty value
    :param config: Handler configuration
    :return AtlasClient:
    """
    profile = load_profile(session, profile_name)
    LOG.info('Using Atlas profile %s', profile.name)
    return client_from_keys(profile.public_key, profile.private_key, config, base_url=profile.base_url)
