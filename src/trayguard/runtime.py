"""Wires the store, poll loop, broadcaster and popover from one config."""

from __future__ import annotations

from dataclasses import dataclass

from trayguard.commands import CommandSurface
from trayguard.config.models import TrayGuardConfig
from trayguard.desktop.headless import HeadlessBackend, LoggingIndicator
from trayguard.desktop.indicator import IndicatorPresenter
from trayguard.desktop.popover import PopoverController
from trayguard.desktop.window import Indicator, WindowBackend
from trayguard.events.broadcaster import Broadcaster
from trayguard.events.emitter import EventEmitter
from trayguard.events.log import EventLog
from trayguard.events.webhook import WebhookListener
from trayguard.events.windows import WindowBroadcastListener
from trayguard.health.aggregator import Aggregator
from trayguard.health.store import HealthStore
from trayguard.supervisor import PollLoop


@dataclass
class Runtime:
    config: TrayGuardConfig
    backend: WindowBackend
    store: HealthStore
    emitter: EventEmitter
    event_log: EventLog
    popover: PopoverController
    poll_loop: PollLoop
    commands: CommandSurface


def build_runtime(
    config: TrayGuardConfig,
    backend: WindowBackend | None = None,
    indicator: Indicator | None = None,
) -> Runtime:
    """Create every component once. Defaults to the headless backend."""
    if backend is None:
        backend = HeadlessBackend()
    if indicator is None:
        indicator = LoggingIndicator(config.indicator.id)

    aggregator = Aggregator(config.endpoints, timeout=config.polling.probe_timeout)
    store = HealthStore(aggregator.initial())

    event_log = EventLog(config.event_log_size)
    emitter = EventEmitter()
    emitter.add_listener(event_log)
    emitter.add_listener(WindowBroadcastListener(backend))
    if config.webhooks:
        emitter.add_listener(WebhookListener(config.webhooks))

    broadcaster = Broadcaster(emitter, IndicatorPresenter(config.indicator, indicator))
    poll_loop = PollLoop(
        aggregator,
        store,
        broadcaster,
        settle_delay=config.polling.settle_delay,
        interval=config.polling.interval,
    )

    popover = PopoverController(backend, config.popover)
    popover.attach()

    commands = CommandSurface(
        store,
        popover,
        backend,
        main_window=config.main_window,
        proxy=config.proxy,
    )
    return Runtime(
        config=config,
        backend=backend,
        store=store,
        emitter=emitter,
        event_log=event_log,
        popover=popover,
        poll_loop=poll_loop,
        commands=commands,
    )
