from enum import StrEnum
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from pausestream.bootstrap.config.loader import get_configfile


class ProducerVariant(StrEnum):
    iterator = "iterator"
    callback = "callback"


class DemoSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAUSESTREAM_",
        extra="ignore"
    )

    count: Annotated[
        int,
        Field(
            description="Numbers 1..count are produced before the stream ends.",
            default=20,
            ge=0
        )
    ]

    producer: Annotated[
        ProducerVariant,
        Field(
            description=(
                "Kind of producer feeding the stream.\n"
                "iterator: a generator object that returns End() when exhausted.\n"
                "callback: a zero-argument function that returns End() as its last event."
            ),
            default=ProducerVariant.iterator
        )
    ]

    initially_paused: Annotated[
        bool,
        Field(
            description="Create the stream paused and resume it right after subscribing.",
            default=False
        )
    ]

    pause_threshold: Annotated[
        int,
        Field(
            description="The source is paused the first time a square exceeds this value.",
            default=30
        )
    ]

    pause_seconds: Annotated[
        float,
        Field(
            description="Delay before the paused source is resumed.",
            default=3.0,
            ge=0
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)

        if configfile := get_configfile():
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)

        return sources
