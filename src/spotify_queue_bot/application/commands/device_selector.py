"""Device selection prompt."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.shared.messages import ReplyMessages
from spotify_queue_bot.utils.reply import mention

from ..services.results import ActionResult
from .command_types import CommandResponse, OptionCallback, OptionPrompt

if TYPE_CHECKING:
    from ...config.settings import OptionSettings
    from ...domain.music.value_objects import Device
    from ..interfaces.playback_adapter import PlaybackAdapter

logger = logging.getLogger(__name__)


class DeviceSelector:
    def __init__(self, *, playback_adapter: PlaybackAdapter, settings: OptionSettings) -> None:
        self._adapter = playback_adapter
        self._emojis = settings.emojis

    async def prompt_selection(self) -> CommandResponse:
        try:
            devices = await self._adapter.list_available_devices()
        except Exception:
            logger.exception("Failed to list devices")
            return CommandResponse.error(ReplyMessages.DEVICES_FAILED)

        devices = devices[: len(self._emojis)]
        if not devices:
            return CommandResponse.error(ReplyMessages.NO_DEVICES)

        return CommandResponse.dm(
            self._format(devices),
            prompt=OptionPrompt(choices=tuple(devices), on_select=self._make_callback(devices)),
        )

    def _format(self, devices: list[Device]) -> str:
        lines = [ReplyMessages.DEVICES_HEADER]
        lines.extend(f"{self._emojis[index]} {device.name}" for index, device in enumerate(devices))
        lines.append(ReplyMessages.DEVICES_FOOTER)
        return "\n".join(lines)

    def _make_callback(self, devices: list[Device]) -> OptionCallback:
        async def select(index: int, creator_id: int) -> ActionResult:
            device = devices[index]
            try:
                await self._adapter.select_device(device)
            except Exception:
                logger.exception("Failed to select device %s", device.name)
                return ActionResult.fail(ReplyMessages.DEVICE_SET_FAILED.format(name=device.name))
            return ActionResult.ok(
                ReplyMessages.DEVICE_SET.format(creator=mention(creator_id), name=device.name)
            )

        return select
