from pageaudit.features.analysis.schemas.issue import Category, IssuePriority
from pageaudit.features.analysis.schemas.node import Node
from pageaudit.features.analysis.services.checkers.accessibility import AccessibilityChecker
from pageaudit.features.analysis.services.checkers.images import ImagesChecker


def image(name="hero-image", alt=None, **kwargs):
    return Node(id=name, name=name, type="image", alt=alt, style={"width": 800, "height": 400}, **kwargs)


def messages(issues):
    return [issue.message for issue in issues]


class TestImagesChecker:
    """Image SEO rules"""

    def test_no_images(self):
        issues = ImagesChecker().analyze([Node(name="paragraph", text="Words only")])
        assert messages(issues) == ["No images found on the page"]
        assert issues[0].priority == IssuePriority.nice_to_have

    def test_described_image_passes(self):
        assert ImagesChecker().analyze([image(alt="Glazed blue mug on a shelf")]) == []

    def test_missing_alt_lists_each_image(self):
        issues = ImagesChecker().analyze([image("photo-a"), image("photo-b")])

        assert messages(issues) == [
            "2 images without alt text",
            "Image 'photo-a' is missing alt text",
            "Image 'photo-b' is missing alt text",
        ]
        assert issues[0].priority == IssuePriority.critical
        assert issues[1].element_id == "photo-a"

    def test_missing_alt_listing_is_capped(self):
        nodes = [image(f"photo-{i}") for i in range(7)]
        found = messages(ImagesChecker().analyze(nodes))

        assert found[0] == "7 images without alt text"
        assert sum(1 for m in found if m.startswith("Image '")) == 5
        assert "And 2 more images without alt text" in found

    def test_empty_alt_counts_as_missing(self):
        found = messages(ImagesChecker().analyze([image(alt="")]))
        assert "1 image without alt text" in found

    def test_decorative_marker_is_case_sensitive(self):
        assert ImagesChecker().analyze([image("decorative-swirl-image")]) == []
        assert "1 image without alt text" in messages(
            ImagesChecker().analyze([image("Decorative-swirl-image")])
        )

    def test_short_alt(self):
        found = messages(ImagesChecker().analyze([image(alt="mug")]))
        assert found == ["1 image has very short alt text"]

    def test_generic_filename(self):
        found = messages(ImagesChecker().analyze([image("IMG1234.jpg", alt="A blue glazed mug")]))
        assert found == ["1 image has generic filenames"]

    def test_lazy_loading_suggested_for_many_images(self):
        nodes = [image(f"photo-{i}", alt="Ceramic bowl") for i in range(4)]
        assert "Multiple images detected - consider implementing lazy loading" in messages(
            ImagesChecker().analyze(nodes)
        )

    def test_missing_dimensions(self):
        node = Node(id="logo", name="logo-img", alt="Studio logo")
        assert messages(ImagesChecker().analyze([node])) == ["1 image lacks explicit dimensions"]

    def test_category(self):
        issues = ImagesChecker().analyze([])
        assert all(issue.category == Category.images for issue in issues)


class TestEmptyAltAsymmetry:
    """An explicitly empty alt is missing for image SEO but correct for accessibility"""

    def test_empty_alt(self):
        node = image(alt="")

        image_messages = messages(ImagesChecker().analyze([node]))
        accessibility_messages = messages(AccessibilityChecker().analyze([node]))

        assert "1 image without alt text" in image_messages
        assert not any(m.startswith("Missing alt text") for m in accessibility_messages)

    def test_absent_alt_is_flagged_by_both(self):
        node = image(alt=None)

        assert "1 image without alt text" in messages(ImagesChecker().analyze([node]))
        assert 'Missing alt text for image "hero-image"' in messages(AccessibilityChecker().analyze([node]))
