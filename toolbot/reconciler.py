"""Startup reconciliation: command registration and pinned reference messages."""

from enum import Enum

from toolbot.calls import Policy, StepAborted, attempt
from toolbot.config import Settings
from toolbot.formatting import ReferenceDocument, contains_marker, reference_documents


class PinOutcome(str, Enum):
    ALREADY_PRESENT = "already_present"
    FOUND_AND_PINNED = "found_and_pinned"
    NEWLY_POSTED = "newly_posted"
    FAILED = "failed"


# Failure policy per platform call
PIN_POLICY = {
    "fetch_pins": Policy.LOG,  # treat as "no pins"
    "fetch_history": Policy.LOG,  # treat as "no history"
    "pin_existing": Policy.ABORT,
    "post_document": Policy.ABORT,
    "pin_new": Policy.ABORT,
}

STARTUP_POLICY = {
    "register_commands": Policy.LOG,
    "set_topic": Policy.LOG,
    "fetch_channel": Policy.LOG,
}


def _find_marker(messages, marker: str):
    return next((m for m in messages if contains_marker(m.content, marker)), None)


async def ensure_pinned(session, channel, document: ReferenceDocument, history_limit: int = 50) -> PinOutcome:
    """Make sure exactly one pinned message in `channel` carries `document.marker`.

    Checks current pins first, then recent history (a previous run may have
    posted but died before pinning), and only posts a new copy when neither
    has it. Never raises.
    """
    try:
        pins = await attempt("fetch_pins", session.fetch_pins(channel), PIN_POLICY["fetch_pins"])
        if pins.ok and _find_marker(pins.value, document.marker):
            return PinOutcome.ALREADY_PRESENT

        recent = await attempt(
            "fetch_history", session.fetch_recent(channel, history_limit), PIN_POLICY["fetch_history"]
        )
        existing = _find_marker(recent.value, document.marker) if recent.ok else None
        if existing is not None:
            await attempt("pin_existing", session.pin(existing), PIN_POLICY["pin_existing"])
            return PinOutcome.FOUND_AND_PINNED

        posted = await attempt(
            "post_document", session.send(channel, content=document.body), PIN_POLICY["post_document"]
        )
        await attempt("pin_new", session.pin(posted.value), PIN_POLICY["pin_new"])
        return PinOutcome.NEWLY_POSTED
    except StepAborted as e:
        print(f"❌ Could not pin reference '{document.marker}': {e}", flush=True)
        return PinOutcome.FAILED


async def run_startup(session, settings: Settings, definitions: list[dict]) -> dict[str, PinOutcome]:
    """One-time startup work. Failures are logged; nothing here raises.

    Returns:
        Marker -> outcome for every reference document (empty if the
        target channel could not be fetched).
    """
    print("🚀 Running startup reconciliation...", flush=True)

    if settings.register_on_startup:
        registered = await attempt(
            "register_commands",
            session.register_commands(definitions),
            STARTUP_POLICY["register_commands"],
        )
        if registered.ok:
            print(f"✅ Registered {len(registered.value)} commands ({settings.scope})", flush=True)
            if not settings.guild_id:
                print("   Global commands can take a while to appear in clients", flush=True)

    channel_result = await attempt(
        "fetch_channel", session.fetch_text_channel(settings.channel_id), STARTUP_POLICY["fetch_channel"]
    )
    if not channel_result.ok:
        print(f"❌ Target channel {settings.channel_id} unavailable; skipping pins", flush=True)
        return {}
    channel = channel_result.value

    if settings.set_channel_topic:
        topic = await attempt(
            "set_topic", session.set_topic(channel, settings.channel_topic), STARTUP_POLICY["set_topic"]
        )
        if topic.ok:
            print("✅ Channel topic updated", flush=True)

    outcomes = {}
    for document in reference_documents(definitions):
        outcome = await ensure_pinned(session, channel, document, settings.history_scan_limit)
        outcomes[document.marker] = outcome
        print(f"   📌 {document.marker}: {outcome.value}", flush=True)

    print("✅ Startup reconciliation complete", flush=True)
    return outcomes
