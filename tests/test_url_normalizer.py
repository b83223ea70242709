import pytest
from centscape.services.url_normalizer import UrlNormalizer, is_tracking_param


class TestUrlNormalizer:
    """Unit tests for UrlNormalizer"""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.normalizer = UrlNormalizer()

    def test_amazon_product_url_is_canonicalized(self):
        """Test that an Amazon URL is reduced to origin + /dp/ + product id."""
        # Act
        result = self.normalizer.normalize("https://www.amazon.com/Some-Title/dp/B08N5WRWNW?ref=xyz")

        # Assert
        assert result.normalized == "https://www.amazon.com/dp/B08N5WRWNW"
        assert result.cleaned is True
        assert result.product_id == "B08N5WRWNW"
        assert result.hostname == "www.amazon.com"
        assert result.original == "https://www.amazon.com/Some-Title/dp/B08N5WRWNW?ref=xyz"

    def test_amazon_gp_product_path(self):
        """Test that the /gp/product/ form maps to the same canonical URL."""
        result = self.normalizer.normalize("https://www.amazon.in/gp/product/B07XJ8C8F5/ref=ppx_yo_dt?th=1")

        assert result.normalized == "https://www.amazon.in/dp/B07XJ8C8F5"
        assert result.product_id == "B07XJ8C8F5"

    def test_flipkart_product_url_is_canonicalized(self):
        result = self.normalizer.normalize(
            "https://www.flipkart.com/apple-iphone-15/p/itm6ac6485515ae4?pid=MOBGTAGPTB3VS24W&utm_source=x"
        )

        assert result.normalized == "https://www.flipkart.com/p/itm6ac6485515ae4"
        assert result.cleaned is True
        assert result.product_id == "itm6ac6485515ae4"

    def test_myntra_product_url_is_canonicalized(self):
        result = self.normalizer.normalize("https://www.myntra.com/product/nike-shoes-123?src=ad")

        assert result.normalized == "https://www.myntra.com/product/nike-shoes-123"
        assert result.cleaned is True
        assert result.product_id == "nike-shoes-123"

    def test_merchant_without_product_id_falls_back_to_generic_cleaning(self):
        """Test that a merchant URL without a product id only loses tracking params."""
        result = self.normalizer.normalize("https://www.amazon.com/s?k=headphones&utm_medium=email")

        assert result.normalized == "https://www.amazon.com/s?k=headphones"
        assert result.cleaned is False
        assert result.product_id is None

    def test_tracking_params_are_removed(self):
        """Test that only id=5 survives from ?utm_source=x&id=5."""
        result = self.normalizer.normalize("https://shop.example.com/item?utm_source=x&id=5")

        assert result.normalized == "https://shop.example.com/item?id=5"

    def test_generic_cleaning_never_sets_cleaned(self):
        result = self.normalizer.normalize("https://shop.example.com/item?fbclid=abc&gclid=def")

        assert result.normalized == "https://shop.example.com/item"
        assert result.cleaned is False
        assert result.product_id is None

    def test_non_tracking_params_keep_order(self):
        result = self.normalizer.normalize("https://example.com/p?b=2&ref=home&a=1&b=3&utm_campaign=z")

        assert result.normalized == "https://example.com/p?b=2&a=1&b=3"

    def test_tracking_keys_are_case_insensitive(self):
        result = self.normalizer.normalize("https://example.com/p?UTM_Source=x&Ref=y&color=red")

        assert result.normalized == "https://example.com/p?color=red"

    def test_fragment_is_kept_and_empty_path_becomes_slash(self):
        result = self.normalizer.normalize("https://Example.com?utm_term=a#reviews")

        assert result.normalized == "https://example.com/#reviews"
        assert result.hostname == "example.com"

    @pytest.mark.parametrize("url", [
        "not a url",
        "",
        "mailto:someone@example.com",
        "http://example.com:99999/item",
        "http://exa mple.com",
        "https://a<b>.com/",
        "http://shop..example.com/item",
    ])
    def test_unparseable_input_is_returned_unchanged(self, url):
        """Test that normalize never raises and reports hostname 'unknown'."""
        result = self.normalizer.normalize(url)

        assert result.original == url
        assert result.normalized == url
        assert result.cleaned is False
        assert result.product_id is None
        assert result.hostname == "unknown"

    def test_none_input_does_not_raise(self):
        result = self.normalizer.normalize(None)

        assert result.hostname == "unknown"
        assert result.cleaned is False

    @pytest.mark.parametrize("url", [
        "https://www.amazon.com/Some-Title/dp/B08N5WRWNW?ref=xyz",
        "https://www.flipkart.com/x/p/itm123?pid=1",
        "https://shop.example.com/item?utm_source=x&id=5&q=a+b",
        "https://example.com/search?q=%7Eshoes&sort=price#top",
        "https://example.com",
    ])
    def test_normalization_is_a_fixed_point(self, url):
        """Test that normalizing a normalized URL returns the same result."""
        first = self.normalizer.normalize(url)
        second = self.normalizer.normalize(first.normalized)

        assert second.normalized == first.normalized
        assert second.cleaned == first.cleaned
        assert second.product_id == first.product_id
        assert second.hostname == first.hostname

    def test_to_dict_uses_camel_case_product_id(self):
        result = self.normalizer.normalize("https://www.amazon.com/dp/B08N5WRWNW").to_dict()

        assert result["productId"] == "B08N5WRWNW"
        assert result["cleaned"] is True

    @pytest.mark.parametrize("url,expected", [
        ("https://a.com", True),
        ("http://example.com/path?x=1", True),
        ("ftp://x", False),
        ("not a url", False),
        ("https://", False),
        ("", False),
        ("http://exa mple.com", False),
        ("https://a<b>.com/", False),
        ("http://[::1]:8080/", True),
    ])
    def test_is_valid_url(self, url, expected):
        assert UrlNormalizer.is_valid_url(url) is expected


@pytest.mark.parametrize("key,expected", [
    ("utm_source", True),
    ("utm_anything", True),
    ("gclid", True),
    ("MC_EID", True),
    ("id", False),
    ("reference", False),
])
def test_is_tracking_param(key, expected):
    assert is_tracking_param(key) is expected
