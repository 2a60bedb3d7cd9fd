"""
cron.d entries that drive the scheduler on the host.

A line is ``<schedule> <user> <command>``. The managed host runs the
scheduler once a minute with its environment sourced first, an explicit
interpreter path, and output appended to a log target::

    * * * * * root . /opt/elasticbeanstalk/support/envvars && cd /var/app/current && /usr/bin/python3 -m followfeed schedule:run 1>> /dev/null 2>&1
"""
from dataclasses import dataclass

from followfeed.core.config import Settings
from followfeed.scheduling.cron import CronExpression, CronSyntaxError

EVERY_MINUTE = "* * * * *"
CRON_FILE_HEADER = "# followfeed scheduler, installed by deployment"


@dataclass(frozen=True)
class CrontabEntry:
    schedule: CronExpression
    user: str
    command: str

    def render(self) -> str:
        return f"{self.schedule} {self.user} {self.command}"

    @classmethod
    def parse(cls, line: str) -> "CrontabEntry":
        text = line.strip()
        if not text or text.startswith("#"):
            raise CronSyntaxError("not a crontab entry")
        schedule_fields = 1 if text.startswith("@") else 5
        parts = text.split(None, schedule_fields + 1)
        if len(parts) != schedule_fields + 2:
            raise CronSyntaxError(f"expected schedule, user and command in {line!r}")
        return cls(
            schedule=CronExpression(" ".join(parts[:schedule_fields])),
            user=parts[schedule_fields],
            command=parts[schedule_fields + 1],
        )


def scheduler_command(settings: Settings) -> str:
    return (
        f". {settings.CRON_ENV_SCRIPT}"
        f" && cd {settings.CRON_APP_DIR}"
        f" && {settings.CRON_PYTHON} -m followfeed schedule:run"
        f" 1>> {settings.CRON_LOG_TARGET} 2>&1"
    )


def scheduler_entry(settings: Settings) -> CrontabEntry:
    return CrontabEntry(
        schedule=CronExpression(EVERY_MINUTE),
        user=settings.CRON_USER,
        command=scheduler_command(settings),
    )


def cron_file(settings: Settings) -> str:
    """Body of the /etc/cron.d file; cron ignores a last line without newline."""
    return f"{CRON_FILE_HEADER}\n{scheduler_entry(settings).render()}\n"
