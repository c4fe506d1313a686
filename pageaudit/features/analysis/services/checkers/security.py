from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

SECURITY_HEADERS = (
    "content-security-policy",
    "x-content-type-options",
    "x-frame-options",
    "x-xss-protection",
    "referrer-policy",
)
SENSITIVE_FORM_MARKERS = ("password", "credit", "card", "payment", "login", "signin")
SUSPICIOUS_DOMAIN_MARKERS = ("evil", "hack", "malware", "phish", "suspicious")


def attribute_tail(node: Node, attribute: str) -> str:
    """Everything in the node name after ``attribute`` (e.g. ``action=``), or an empty string."""
    index = node.lower_name.find(attribute)
    if index < 0:
        return ""
    return node.name[index + len(attribute):]


def _is_insecure_url(value: str, *, prefix_only: bool = True) -> bool:
    found = value.startswith("http://") if prefix_only else "http://" in value
    return found and "localhost" not in value


def lacks_script_integrity(node: Node) -> bool:
    return (
        (node.type == "script" and bool(node.href) and "integrity=" not in node.href)
        or (p.name_has_all(node, "script", "src=") and "integrity=" not in node.lower_name)
    )


def lacks_stylesheet_integrity(node: Node) -> bool:
    return (
        (node.type in ("link", "resource") and node.rel == "stylesheet" and bool(node.href) and "integrity=" not in node.href)
        or (p.name_has_all(node, "link", "stylesheet", "href=") and "integrity=" not in node.lower_name)
    )


def is_csp_tag(node: Node) -> bool:
    return p.name_has_all(node, "meta", "content-security-policy") or (
        node.meta("name") == "http-equiv"
        and "content-security-policy" in (node.meta("content") or "").lower()
    )


class SecurityChecker(Checker):
    category = Category.security

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_https(nodes, issues)
        self._check_forms(nodes, issues)
        self._check_security_headers(nodes, issues)
        self._check_external_resources(nodes, issues)
        self._check_content_security_policy(nodes, issues)

        return issues

    def _check_https(self, nodes, issues: List[Issue]) -> None:
        insecure = [
            n for n in nodes
            if _is_insecure_url(n.href or "")
            or _is_insecure_url(n.meta("content") or "")
            or _is_insecure_url(n.text or "", prefix_only=False)
        ]
        if insecure:
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Insecure HTTP URLs detected",
                "Replace all HTTP URLs with HTTPS to ensure secure connections",
                resource=("https://web.dev/why-https-matters/", "Web.dev: Why HTTPS matters"),
            ))

        mixed = [
            n for n in nodes
            if (n.href or "").startswith("https://") and _is_insecure_url(n.text or "", prefix_only=False)
        ]
        if mixed:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Potential mixed content issues",
                "Ensure all resources are loaded over HTTPS to prevent mixed content warnings",
                resource=("https://web.dev/what-is-mixed-content/", "Web.dev: What is mixed content?"),
            ))

    def _check_forms(self, nodes, issues: List[Issue]) -> None:
        forms = [n for n in nodes if n.type == "form" or "form" in n.lower_name]
        if not forms:
            return

        if any(_is_insecure_url(attribute_tail(n, "action=")) for n in forms):
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Insecure form submission",
                "Ensure all form actions use HTTPS to protect user data during transmission",
                resource=("https://web.dev/security-forms/", "Web.dev: Secure forms"),
            ))

        for form in forms:
            if not p.name_has(form, *SENSITIVE_FORM_MARKERS):
                continue
            if p.name_has(form, 'autocomplete="off"', "autocomplete='off'"):
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    "Autocomplete disabled on sensitive form",
                    "Avoid disabling autocomplete on password fields to allow password managers to work",
                    element=form.name,
                    element_id=form.id,
                    resource=(
                        "https://web.dev/sign-in-form-best-practices/#autocomplete",
                        "Web.dev: Autocomplete for login forms",
                    ),
                ))

    def _check_security_headers(self, nodes, issues: List[Issue]) -> None:
        found = any(
            any(header in attribute_tail(n, "http-equiv=").lower() for header in SECURITY_HEADERS)
            for n in nodes
            if "meta" in n.lower_name
        )
        if not found:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No security headers detected",
                "Consider implementing security headers like Content-Security-Policy, X-Content-Type-Options, etc.",
                resource=("https://web.dev/security-headers/", "Web.dev: Security headers"),
            ))

    def _check_external_resources(self, nodes, issues: List[Issue]) -> None:
        if any(lacks_script_integrity(n) or lacks_stylesheet_integrity(n) for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "External resources without SRI",
                "Use Subresource Integrity (SRI) for external scripts and stylesheets",
                resource=("https://web.dev/csp-sri/", "Web.dev: Subresource Integrity"),
            ))

        if any(any(m in (n.href or "") for m in SUSPICIOUS_DOMAIN_MARKERS) for n in nodes):
            issues.append(self.issue(
                ERROR, CRITICAL,
                "Potentially suspicious resource domains",
                "Review external resources for suspicious or malicious domains",
                resource=("https://owasp.org/www-community/attacks/xss/", "OWASP: Cross-Site Scripting (XSS)"),
            ))

    def _check_content_security_policy(self, nodes, issues: List[Issue]) -> None:
        csp = p.find_first(nodes, is_csp_tag)

        if not csp:
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No Content Security Policy detected",
                "Implement a Content Security Policy to mitigate XSS and data injection attacks",
                resource=("https://web.dev/csp/", "Web.dev: Content Security Policy"),
            ))
            return

        content = csp.meta("content") or ""
        if "unsafe-inline" in content or "unsafe-eval" in content:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Weak Content Security Policy",
                "Avoid using 'unsafe-inline' or 'unsafe-eval' in your Content Security Policy",
                resource=("https://web.dev/strict-csp/", "Web.dev: Mitigate XSS with a strict CSP"),
            ))
