# File: serp_scout/checks/robots_txt.py
"""robots.txt validation, URL access check and template generation."""

from __future__ import annotations

from typing import Final, Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from serp_scout.checks.models import RobotsTxtDirective, RobotsTxtResult
from serp_scout.logger import logger

__all__ = [
    "VALID_DIRECTIVES",
    "generate_robots_txt_template",
    "is_url_allowed",
    "parse_robots_line",
    "validate_robots_txt",
]

VALID_DIRECTIVES: Final[Tuple[str, ...]] = (
    "user-agent",
    "disallow",
    "allow",
    "sitemap",
    "crawl-delay",
    "host",
)


def _is_absolute_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def _value_error(directive: str, value: str) -> Optional[str]:
    if directive == "user-agent" and not value:
        return "User-agent value cannot be empty"
    if directive == "crawl-delay":
        try:
            delay = float(value)
        except ValueError:
            return "Crawl-delay must be a positive number"
        if delay < 0:
            return "Crawl-delay must be a positive number"
    if directive == "sitemap" and not _is_absolute_url(value):
        return "Sitemap must be a valid URL"
    return None


def parse_robots_line(line: str, line_number: int) -> Optional[RobotsTxtDirective]:
    """Parse one line; blank lines and comments give ``None``."""
    line = line.split("#", 1)[0].strip()
    if not line:
        return None

    if ":" not in line:
        return RobotsTxtDirective(
            directive="unknown",
            value=line,
            line_number=line_number,
            is_valid=False,
            error='Invalid directive format. Expected "Directive: Value"',
        )

    key, value = (part.strip() for part in line.split(":", 1))
    key = key.lower()
    if key not in VALID_DIRECTIVES:
        return RobotsTxtDirective(
            directive="unknown",
            value=value,
            line_number=line_number,
            is_valid=False,
            error=f'Unknown directive: "{key}"',
        )

    error = _value_error(key, value)
    return RobotsTxtDirective(
        directive=key,
        value=value,
        line_number=line_number,
        is_valid=error is None,
        error=error,
    )


def _parse(content: str) -> List[RobotsTxtDirective]:
    directives: List[RobotsTxtDirective] = []
    for number, raw in enumerate(content.splitlines(), start=1):
        directive = parse_robots_line(raw, number)
        if directive is not None:
            directives.append(directive)
    return directives


def validate_robots_txt(content: str) -> RobotsTxtResult:
    """Check every line of a robots.txt file.

    An empty file is valid: it grants every crawler full access.
    """
    if not content or not content.strip():
        return RobotsTxtResult(
            is_valid=True,
            directives=[],
            user_agents=[],
            sitemaps=[],
            errors=[],
            warnings=["Empty robots.txt file - all crawlers will have full access"],
        )

    directives = _parse(content)
    errors: List[str] = []
    warnings: List[str] = []
    user_agents: dict[str, None] = {}
    sitemaps: dict[str, None] = {}
    current_agent: Optional[str] = None

    for d in directives:
        if d.error:
            errors.append(f"Line {d.line_number}: {d.error}")

        if d.directive == "user-agent":
            current_agent = d.value
            user_agents[d.value] = None
        elif d.directive == "sitemap":
            sitemaps[d.value] = None
        elif d.directive in ("allow", "disallow") and not current_agent:
            warnings.append(f"Line {d.line_number}: {d.directive} before any User-agent declaration")

    if not user_agents and directives:
        warnings.append("No User-agent directive found")
    if not sitemaps:
        warnings.append("No Sitemap directive found - consider adding one for better crawling")
    if "*" not in user_agents:
        warnings.append("No wildcard User-agent (*) found - some crawlers may not be covered")

    logger.debug("robots.txt: %d directive(s), %d error(s)", len(directives), len(errors))
    return RobotsTxtResult(
        is_valid=not errors,
        directives=directives,
        user_agents=list(user_agents),
        sitemaps=list(sitemaps),
        errors=errors,
        warnings=warnings,
    )


def _matches_agent(agents: Iterable[str], user_agent: str) -> bool:
    ua = user_agent.lower()
    return any(agent == "*" or agent.lower() in ua for agent in agents)


def _rules_for(directives: List[RobotsTxtDirective], user_agent: str) -> List[Tuple[str, str]]:
    """Allow/disallow rules of every group that applies to *user_agent*.

    Consecutive User-agent lines form one group.
    """
    rules: List[Tuple[str, str]] = []
    agents: List[str] = []
    in_group_header = False
    for d in directives:
        if d.directive == "user-agent":
            if not in_group_header:
                agents = []
            agents.append(d.value)
            in_group_header = True
            continue
        in_group_header = False
        # an empty rule value matches nothing
        if d.directive in ("allow", "disallow") and d.value and _matches_agent(agents, user_agent):
            rules.append((d.directive, d.value))
    return rules


def is_url_allowed(robots_txt: str, url: str, user_agent: str = "*") -> bool:
    """Whether *user_agent* may crawl *url* under *robots_txt*.

    The longest matching rule wins, ``Allow`` on a tie. URLs without a scheme
    and host, and paths with no matching rule, are allowed.
    """
    if not _is_absolute_url(url):
        return True
    path = urlsplit(url).path or "/"

    rules = _rules_for(_parse(robots_txt or ""), user_agent)
    rules.sort(key=lambda rule: (len(rule[1]), rule[0] == "allow"), reverse=True)
    for directive, value in rules:
        if path.startswith(value):
            return directive == "allow"
    return True


def generate_robots_txt_template(
    *,
    allow_all: bool = False,
    disallow_paths: Optional[Iterable[str]] = None,
    sitemap_url: Optional[str] = None,
) -> str:
    """Minimal robots.txt for every crawler."""
    lines = ["User-agent: *"]
    paths = list(disallow_paths or [])
    if allow_all:
        lines.append("Allow: /")
    elif paths:
        lines.extend(f"Disallow: {path}" for path in paths)
    else:
        lines.append("Disallow:")

    if sitemap_url:
        lines.extend(["", f"Sitemap: {sitemap_url}"])
    return "\n".join(lines)
