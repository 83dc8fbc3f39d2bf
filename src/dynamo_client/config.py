from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, cast

import boto3
from botocore.config import Config

from .errors import InvalidConfigurationError

type RegionKind = Literal["explicit", "ambient"]

_AMBIENT_REGION_VARS = ("AWS_REGION", "AWS_DEFAULT_REGION")


def ambient_region(environ: Mapping[str, str] = os.environ) -> str | None:
    for var in _AMBIENT_REGION_VARS:
        value = (environ.get(var) or "").strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class RegionSource:
    kind: RegionKind
    name: str | None = None

    @staticmethod
    def explicit(name: str) -> RegionSource:
        if not name:
            raise InvalidConfigurationError("region name is required")
        return RegionSource(kind="explicit", name=name)

    @staticmethod
    def ambient() -> RegionSource:
        return RegionSource(kind="ambient")

    def resolve(self, environ: Mapping[str, str] = os.environ) -> str:
        if self.kind == "explicit" and self.name:
            return self.name
        region = ambient_region(environ)
        if region is None:
            raise InvalidConfigurationError(
                "region name is required (set it explicitly or export AWS_REGION)"
            )
        return region


def create_boto3_config(
    *,
    connect_timeout: float = 1.0,
    read_timeout: float = 3.0,
) -> Config:
    return Config(connect_timeout=connect_timeout, read_timeout=read_timeout)


def create_dynamodb_client(
    region: str | None = None,
    *,
    endpoint_url: str | None = None,
    config: Config | None = None,
    session: Any | None = None,
    environ: Mapping[str, str] = os.environ,
) -> Any:
    endpoint = endpoint_url or (environ.get("DYNAMODB_ENDPOINT") or "").strip() or None
    sess = session or boto3.session.Session(region_name=region)
    return cast(Any, sess).client("dynamodb", region_name=region, endpoint_url=endpoint, config=config)
