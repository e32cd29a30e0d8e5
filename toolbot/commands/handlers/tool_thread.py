"""Handler for catalog commands: open a private thread full of tool links."""

from datetime import datetime, timezone

from toolbot.calls import Policy, attempt
from toolbot.catalog import ToolEntry
from toolbot.commands.command import SlashCommand, CommandContext, CommandResult, ThreadSession
from toolbot.formatting import (
    FAILURE_MESSAGE,
    MISCONFIGURED_MESSAGE,
    SUCCESS_MESSAGE,
    SUCCESS_MESSAGE_NO_INVITE,
    WARNING,
    make_embed,
    thread_name,
)


# Failure policy per platform call; ABORT ends provisioning with the failure reply
DISPATCH_POLICY = {
    "defer": Policy.LOG,
    "fetch_channel": Policy.LOG,  # reported as misconfiguration
    "create_thread": Policy.ABORT,
    "add_member": Policy.LOG,
    "post_disclaimer": Policy.ABORT,
    "pin_disclaimer": Policy.IGNORE,
    "post_entry": Policy.ABORT,
    "acknowledge": Policy.ABORT,
    "failure_ack": Policy.LOG,
}


class ToolThreadCommand(SlashCommand):
    """Post one command's tool list into a fresh private thread."""

    def __init__(self, name: str, entries: tuple[ToolEntry, ...]):
        self.name = name
        self.entries = entries

    async def execute(self, ctx: CommandContext) -> CommandResult:
        session = ctx.session
        settings = ctx.settings

        print(f"", flush=True)
        print(f"▶ [BOT] {self.name} from {ctx.user_name} ({ctx.user_id})", flush=True)

        deferred = False
        if settings.defer_reply:
            deferred = (await attempt("defer", session.defer(ctx.interaction), DISPATCH_POLICY["defer"])).ok

        try:
            channel = await attempt(
                "fetch_channel",
                session.fetch_text_channel(settings.channel_id),
                DISPATCH_POLICY["fetch_channel"],
            )
            if not channel.ok:
                await self._reply_failure(ctx, deferred, MISCONFIGURED_MESSAGE)
                return CommandResult(status="error", action=self.name, message="Target channel misconfigured")

            thread = (await attempt(
                "create_thread",
                session.create_private_thread(
                    channel.value,
                    thread_name(ctx.user_name, ctx.command_name),
                    settings.thread_archive_minutes,
                    reason=f"Thread for {ctx.user_name} - {ctx.command_name}",
                ),
                DISPATCH_POLICY["create_thread"],
            )).value
            thread_session = ThreadSession(
                channel_id=channel.value.id,
                thread_id=thread.id,
                inviter_user_id=ctx.user_id,
                created_at=datetime.now(timezone.utc),
            )
            print(f"       Thread: {thread.id}", flush=True)

            status = "completed"
            if settings.auto_invite_invoker:
                added = await attempt(
                    "add_member",
                    session.add_thread_member(thread, ctx.user_id),
                    DISPATCH_POLICY["add_member"],
                )
                if not added.ok:
                    # User can't see the thread until a moderator adds them
                    status = "degraded"
                    print(f"⚠️ {ctx.user_name} not added to thread {thread.id}", flush=True)

            warning = await attempt(
                "post_disclaimer", session.send(thread, content=WARNING), DISPATCH_POLICY["post_disclaimer"]
            )
            await attempt("pin_disclaimer", session.pin(warning.value), DISPATCH_POLICY["pin_disclaimer"])

            for entry in self.entries:
                await attempt("post_entry", session.send(thread, embed=make_embed(entry)), DISPATCH_POLICY["post_entry"])

            template = SUCCESS_MESSAGE if settings.auto_invite_invoker else SUCCESS_MESSAGE_NO_INVITE
            await attempt(
                "acknowledge",
                session.acknowledge(
                    ctx.interaction,
                    template.format(channel_id=settings.channel_id, thread=thread.mention),
                    deferred,
                ),
                DISPATCH_POLICY["acknowledge"],
            )
        except Exception as e:
            print(f"❌ {self.name} failed for {ctx.user_name}: {e}", flush=True)
            await self._reply_failure(ctx, deferred, FAILURE_MESSAGE)
            return CommandResult(status="error", action=self.name, message=str(e))

        print(f"✅ {self.name}: posted {len(self.entries)} tools ({status})", flush=True)
        return CommandResult(status=status, action=self.name, thread=thread_session)

    async def _reply_failure(self, ctx: CommandContext, deferred: bool, content: str) -> None:
        await attempt(
            "failure_ack",
            ctx.session.acknowledge(ctx.interaction, content, deferred),
            DISPATCH_POLICY["failure_ack"],
        )
