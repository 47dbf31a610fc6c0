"""
Varnish Purge Task

Architectural Intent:
- Infrastructure task purging the Varnish cache through varnishadm
- execute issues the purge; simulate issues a read-only status call instead
- Shape for any control-plane task: validate options, default the rest,
  one gateway call, no rollback since a purge cannot be undone
"""

import shlex
from dataclasses import dataclass
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.tasks.options import TaskOptions
from shipyard.domain.tasks.task import Task, TaskOptionsMapping
from shipyard.domain.value_objects.node import Node

MANAGEMENT_ADDRESS = "127.0.0.1:6082"


@dataclass(frozen=True)
class VarnishPurgeOptions(TaskOptions):
    secret_file: str = "/etc/varnish/secret"
    purge_url: str = "."
    varnishadm: str = "/usr/bin/varnishadm"

    def admin_command(self, *arguments: str) -> str:
        parts = [
            shlex.quote(self.varnishadm),
            "-S",
            shlex.quote(self.secret_file),
            "-T",
            MANAGEMENT_ADDRESS,
        ]
        return " ".join(parts + [shlex.quote(a) for a in arguments])


class VarnishPurgeTask(Task):
    name = "varnish_purge"

    async def execute(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        parsed = VarnishPurgeOptions.from_mapping(options, self.name)
        await self.shell.execute_or_simulate(
            parsed.admin_command("url.purge", parsed.purge_url), node, deployment
        )

    async def simulate(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        parsed = VarnishPurgeOptions.from_mapping(options, self.name)
        await self.shell.execute_or_simulate(
            parsed.admin_command("status"), node, deployment
        )
