"""DNS existence checks for generated hostnames."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

import dns.asyncquery
import dns.exception
import dns.message
import dns.rcode
import dns.rdatatype

from hns.config import Settings
from hns.domain.entities import ProbeResult
from hns.domain.errors import ResolutionUnavailableError, ValidationFailure
from hns.utils import now_utc

DnsTransport = Callable[[dns.message.Message, str, int, float], Awaitable[dns.message.Message]]


async def udp_transport(
    query: dns.message.Message, server: str, port: int, timeout: float
) -> dns.message.Message:
    """Send ``query`` to ``server`` over UDP."""

    return await dns.asyncquery.udp(query, server, timeout=timeout, port=port)


class ExistenceProbe:
    """Check whether a hostname resolves, trying each configured server in order."""

    def __init__(
        self,
        servers: Sequence[str],
        *,
        timeout: float = 5.0,
        port: int = 53,
        domain_suffix: str | None = None,
        transport: DnsTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.servers = list(servers)
        self.timeout = timeout
        self.port = port
        self.domain_suffix = domain_suffix
        self.transport = transport or udp_transport
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: DnsTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> "ExistenceProbe":
        return cls(
            settings.dns_servers,
            timeout=settings.dns_timeout,
            port=settings.dns_port,
            domain_suffix=settings.dns_domain_suffix,
            transport=transport,
            logger=logger,
        )

    def qualify(self, hostname: str) -> str:
        """Append the configured domain suffix to unqualified names."""

        name = hostname.strip().rstrip(".")
        if self.domain_suffix and "." not in name:
            name = f"{name}.{self.domain_suffix}"
        return name

    async def check(self, hostname: str) -> ProbeResult:
        """Return whether ``hostname`` has an ``A`` answer on the first definitive server.

        ``NXDOMAIN`` is definitive and stops the search; other response codes and
        transport errors (including a server address dnspython cannot parse) move
        on to the next server. When every server failed a
        ``ResolutionUnavailableError`` is raised.
        """

        if not hostname or not hostname.strip():
            raise ValidationFailure("Empty hostname")

        qname = self.qualify(hostname)
        query = dns.message.make_query(qname, dns.rdatatype.A)

        last_error: str | None = None
        for server in self.servers:
            try:
                response = await self.transport(query, server, self.port, self.timeout)
            except (dns.exception.DNSException, OSError, ValueError) as exc:
                last_error = f"{server}: {exc!r}"
                self.logger.warning(
                    "DNS query for %s failed on server %s: %s", qname, server, exc
                )
                continue

            rcode = response.rcode()
            if rcode == dns.rcode.NOERROR:
                exists = bool(response.answer)
                return ProbeResult(
                    hostname=hostname,
                    exists=exists,
                    ip_address=_first_address(response) if exists else None,
                    verified_at=now_utc(),
                )
            if rcode == dns.rcode.NXDOMAIN:
                return ProbeResult(
                    hostname=hostname,
                    exists=False,
                    ip_address=None,
                    verified_at=now_utc(),
                )

            last_error = f"{server}: {dns.rcode.to_text(rcode)}"
            self.logger.warning(
                "DNS query for %s returned %s from server %s",
                qname,
                dns.rcode.to_text(rcode),
                server,
            )

        if last_error is not None:
            raise ResolutionUnavailableError(
                f"All DNS servers failed for {qname}; last error: {last_error}"
            )
        return ProbeResult(
            hostname=hostname, exists=False, ip_address=None, verified_at=now_utc()
        )

    async def check_many(self, hostnames: Sequence[str]) -> list[ProbeResult]:
        """Check ``hostnames`` concurrently; fail only if every lookup failed."""

        if not hostnames:
            return []

        outcomes = await asyncio.gather(
            *(self.check(hostname) for hostname in hostnames), return_exceptions=True
        )

        results: list[ProbeResult] = []
        first_error: BaseException | None = None
        for hostname, outcome in zip(hostnames, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                self.logger.warning("DNS check for %s failed: %s", hostname, outcome)
                if first_error is None:
                    first_error = outcome
                continue
            results.append(outcome)

        if not results and first_error is not None:
            raise first_error
        return results


def _first_address(response: dns.message.Message) -> str | None:
    for rrset in response.answer:
        if rrset.rdtype == dns.rdatatype.A:
            for rdata in rrset:
                return rdata.address
    return None


__all__ = ["DnsTransport", "ExistenceProbe", "udp_transport"]
