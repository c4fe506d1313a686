from typing import List, Sequence

from pageaudit.features.analysis.schemas.issue import Category, Issue
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers import predicates as p
from pageaudit.features.analysis.services.checkers.base import (
    CRITICAL, ERROR, IMPORTANT, INFO, NICE_TO_HAVE, WARNING, Checker,
)

IMAGE_MARKERS = ("image", "img", "picture")
MIN_ALT_LENGTH = 5
MIN_FONT_SIZE = 12

VALID_ROLES = frozenset({
    "button", "checkbox", "dialog", "gridcell", "link", "menuitem",
    "menuitemcheckbox", "menuitemradio", "option", "progressbar",
    "radio", "scrollbar", "searchbox", "slider", "spinbutton",
    "switch", "tab", "tabpanel", "textbox", "treeitem",
})

WEB_DEV_IMAGES = ("https://web.dev/learn/accessibility/images/", "Web.dev: Images and accessibility")
WEB_DEV_CONTRAST = ("https://web.dev/learn/accessibility/color-contrast/", "Web.dev: Color and contrast")


class AccessibilityChecker(Checker):
    """
    Screen reader and keyboard accessibility.

    Unlike the images checker, an explicitly empty alt (``alt=""``) is the
    correct markup for a decorative image and is not reported as missing.
    """

    category = Category.accessibility

    def analyze(self, nodes: Sequence[Node]) -> List[Issue]:
        issues: List[Issue] = []

        self._check_image_alt_text(nodes, issues)
        self._check_aria_attributes(nodes, issues)
        self._check_forms(nodes, issues)
        self._check_keyboard_navigation(nodes, issues)
        self._check_color_contrast(nodes, issues)
        self._check_text_size(nodes, issues)

        return issues

    def _check_image_alt_text(self, nodes, issues: List[Issue]) -> None:
        images = [n for n in nodes if p.looks_like_image(n, IMAGE_MARKERS)]
        if not images:
            return

        for node in images:
            if node.alt is None and not node.aria_label:
                issues.append(self.issue(
                    ERROR, CRITICAL,
                    f'Missing alt text for image "{node.name}"',
                    "Add descriptive alt text to all images for screen readers and better accessibility",
                    element=node.name,
                    element_id=node.id,
                    resource=WEB_DEV_IMAGES,
                ))
            elif node.alt and (node.alt == "image" or len(node.alt) < MIN_ALT_LENGTH):
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f'Non-descriptive alt text "{node.alt}" for image "{node.name}"',
                    "Use descriptive alt text that conveys the purpose and content of the image",
                    element=node.name,
                    element_id=node.id,
                    resource=WEB_DEV_IMAGES,
                ))

        for node in images:
            if p.looks_decorative(node) and node.alt != "":
                issues.append(self.issue(
                    INFO, NICE_TO_HAVE,
                    f'Decorative image "{node.name}" should have empty alt text',
                    'For decorative images, use empty alt text (alt="") to hide them from screen readers',
                    element=node.name,
                    element_id=node.id,
                    resource=("https://www.w3.org/WAI/tutorials/images/decorative/", "W3C: Decorative Images"),
                ))

    def _check_aria_attributes(self, nodes, issues: List[Issue]) -> None:
        for node in nodes:
            if node.role and node.role.lower() not in VALID_ROLES:
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f'Potentially invalid ARIA role "{node.role}" on element "{node.name}"',
                    "Use valid ARIA roles from the WAI-ARIA specification",
                    element=node.name,
                    element_id=node.id,
                    resource=(
                        "https://developer.mozilla.org/en-US/docs/Web/Accessibility/ARIA/Roles",
                        "MDN: ARIA Roles",
                    ),
                ))

            if p.looks_interactive(node) and not node.aria_label and not node.text:
                issues.append(self.issue(
                    ERROR, CRITICAL,
                    f'Interactive element "{node.name}" has no accessible name',
                    "Add text content or aria-label to all interactive elements",
                    element=node.name,
                    element_id=node.id,
                    resource=(
                        "https://web.dev/learn/accessibility/aria-html/#accessible-names",
                        "Web.dev: Accessible names",
                    ),
                ))

    def _check_forms(self, nodes, issues: List[Issue]) -> None:
        if not any(p.looks_like_form(n) for n in nodes):
            return

        inputs = [n for n in nodes if p.looks_like_input(n)]
        for node in inputs:
            has_label = any(
                "label" in other.lower_name and node.lower_name in other.lower_name
                for other in nodes
            )
            if not has_label and not node.aria_label:
                issues.append(self.issue(
                    ERROR, CRITICAL,
                    f'Input "{node.name}" has no associated label',
                    "Associate a label with every form control or use aria-label",
                    element=node.name,
                    element_id=node.id,
                    resource=("https://web.dev/learn/accessibility/forms/", "Web.dev: Accessible forms"),
                ))

        has_error_message = any(p.name_has(n, "error", "validation", "helper") for n in nodes)
        if inputs and not has_error_message:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Form may lack error validation messages",
                "Include clear error messages and validation guidance for form inputs",
                resource=(
                    "https://web.dev/learn/accessibility/forms/#error-reporting",
                    "Web.dev: Form error reporting",
                ),
            ))

    def _check_keyboard_navigation(self, nodes, issues: List[Issue]) -> None:
        if not any(p.has_focus_style(n) for n in nodes):
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "No visible focus indicators detected",
                "Add visible focus indicators for keyboard navigation",
                resource=("https://web.dev/learn/accessibility/focus/", "Web.dev: Focus"),
            ))

        if not any(p.name_has_all(n, "skip", "navigation") for n in nodes):
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                "No skip navigation link detected",
                "Add a 'Skip to main content' link at the beginning of the page for keyboard users",
                resource=("https://web.dev/learn/accessibility/focus/#skip-navigation", "Web.dev: Skip navigation"),
            ))

    def _check_color_contrast(self, nodes, issues: List[Issue]) -> None:
        flagged = False
        for node in nodes:
            if not p.looks_like_text(node) or not node.style:
                continue
            color, background = node.style.color, node.style.background_color
            if color and background and p.has_same_tone_colors(color, background):
                flagged = True
                issues.append(self.issue(
                    WARNING, IMPORTANT,
                    f'Potential contrast issue in "{node.name}"',
                    "Ensure text has sufficient contrast with its background (minimum ratio of 4.5:1)",
                    element=node.name,
                    element_id=node.id,
                    resource=WEB_DEV_CONTRAST,
                ))

        if not flagged:
            issues.append(self.issue(
                INFO, IMPORTANT,
                "Verify color contrast in your design",
                "Use a contrast checker tool to ensure all text meets WCAG standards "
                "(4.5:1 for normal text, 3:1 for large text)",
                resource=WEB_DEV_CONTRAST,
            ))

    def _check_text_size(self, nodes, issues: List[Issue]) -> None:
        small_text = [n for n in nodes if n.font_size and n.font_size < MIN_FONT_SIZE]

        if small_text:
            issues.append(self.issue(
                WARNING, IMPORTANT,
                "Text size may be too small for some users",
                "Use a minimum font size of 12px, preferably 16px for body text",
                resource=(
                    "https://web.dev/learn/accessibility/typography/#font-size",
                    "Web.dev: Typography and accessibility",
                ),
            ))
            example = small_text[0]
            issues.append(self.issue(
                INFO, NICE_TO_HAVE,
                f'Small text found in "{example.name}" ({example.font_size:g}px)',
                "Increase font size for better readability",
                element=example.name,
                element_id=example.id,
            ))

        # Unit types are not visible in style hints
        issues.append(self.issue(
            INFO, NICE_TO_HAVE,
            "Consider using relative units for text sizing",
            "Use relative units like rem or em instead of pixels to support user font size preferences",
            resource=(
                "https://web.dev/learn/accessibility/typography/#responsive-typography",
                "Web.dev: Responsive typography",
            ),
        ))
