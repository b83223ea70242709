import pytest
from centscape.services.fallback_extractor import FallbackExtractor
from centscape.services.html_parser import HTMLParser


def _extractor(html: str, url: str = "https://shop.example.com/item") -> FallbackExtractor:
    return FallbackExtractor(HTMLParser(html, url))


class TestFallbackTitle:
    """Title chain: h1, document title, title classes, test ids"""

    def test_h1_wins_over_document_title(self):
        html = "<html><head><title>Doc Title</title></head><body><h1> Heading </h1></body></html>"

        assert _extractor(html).extract_title() == "Heading"

    def test_empty_h1_falls_through_to_document_title(self):
        html = "<html><head><title>Doc Title</title></head><body><h1>  </h1></body></html>"

        assert _extractor(html).extract_title() == "Doc Title"

    def test_data_testid_title(self):
        html = '<html><body><span data-testid="product-title">Blue Kettle</span></body></html>'

        assert _extractor(html).extract_title() == "Blue Kettle"

    def test_no_title(self):
        assert _extractor("<html><body><p>x</p></body></html>").extract_title() is None


class TestFallbackDescription:

    def test_meta_description(self):
        html = '<html><head><meta name="description" content="A kettle that boils water fast"></head></html>'

        assert _extractor(html).extract_description() == "A kettle that boils water fast"

    def test_short_values_are_skipped(self):
        """Test that a value of ten characters or fewer is not accepted."""
        # Arrange
        html = """
        <html><head><meta name="description" content="Too short"></head>
        <body><div class="summary">Summary text that is long enough</div></body></html>
        """

        # Act
        result = _extractor(html).extract_description()

        # Assert
        assert result == "Summary text that is long enough"

    def test_first_paragraph_is_truncated(self):
        html = f"<html><body><p>{'word ' * 100}</p></body></html>"

        result = _extractor(html).extract_description()

        assert len(result) == 200
        assert result.startswith("word word")


class TestFallbackPrice:

    def test_price_selector_wins_over_page_text(self):
        # Arrange
        html = """
        <html><body>
            <p>Was $99.00</p>
            <div class="product-price">₹1,299</div>
        </body></html>
        """

        # Act
        price = _extractor(html).extract_price()

        # Assert
        assert price.amount == 1299.0
        assert price.currency == "INR"
        assert price.raw == "₹1,299"

    def test_page_text_scan(self):
        html = "<html><body><p>Now only $24.99 while stocks last</p></body></html>"

        price = _extractor(html).extract_price()

        assert price.raw == "$24.99"
        assert price.amount == 24.99
        assert price.currency == "USD"

    def test_scripts_are_not_scanned(self):
        html = '<html><body><script>var p = "$5.00";</script><p>Out of stock</p></body></html>'

        assert _extractor(html).extract_price() is None


class TestFallbackAuthorAndDate:

    def test_author_from_meta(self):
        html = '<html><head><meta name="author" content="Jane Doe"></head></html>'

        assert _extractor(html).extract_author() == "Jane Doe"

    def test_overlong_author_is_rejected(self):
        html = f'<html><body><span class="byline">{"x" * 150}</span><a rel="author">Sam</a></body></html>'

        assert _extractor(html).extract_author() == "Sam"

    def test_publish_date_from_time_element(self):
        html = '<html><body><time datetime="2024-03-01T10:00:00Z">March 1</time></body></html>'

        assert _extractor(html).extract_publish_date() == "2024-03-01T10:00:00Z"

    def test_unparseable_date_is_skipped(self):
        html = '<html><body><span class="date">lorem ipsum</span></body></html>'

        assert _extractor(html).extract_publish_date() is None


class TestFallbackLanguageAndSiteName:

    def test_language_from_html_lang(self):
        assert _extractor('<html lang="de"><body></body></html>').extract_language() == "de"

    def test_language_from_http_equiv(self):
        html = '<html><head><meta http-equiv="Content-Language" content="fr"></head></html>'

        assert _extractor(html).extract_language() == "fr"

    def test_language_default(self):
        assert _extractor("<html><body></body></html>").extract_language() == "en"

    @pytest.mark.parametrize("html, expected", [
        ('<html><head><meta name="application-name" content="Shoply"></head></html>', "Shoply"),
        ("<html><head><title>Blue Kettle | Kitchen | Shoply </title></head></html>", "Shoply"),
        ("<html><head><title>Blue Kettle</title></head></html>", "Blue Kettle"),
        ("<html><body></body></html>", None),
    ])
    def test_site_name(self, html, expected):
        assert _extractor(html).extract_site_name() == expected


class TestFallbackExtract:

    def test_extract_collects_all_fields(self):
        # Arrange
        html = """
        <html lang="en-GB">
        <head>
            <title>Blue Kettle | Shoply</title>
            <meta name="description" content="A kettle that boils water fast">
        </head>
        <body>
            <h1>Blue Kettle</h1>
            <span class="price">£30.00</span>
            <img src="/media/product-kettle.jpg" alt="Kettle">
        </body>
        </html>
        """

        # Act
        fallback = _extractor(html).extract()

        # Assert
        assert fallback.title == "Blue Kettle"
        assert fallback.description == "A kettle that boils water fast"
        assert fallback.price.currency == "GBP"
        assert fallback.price.amount == 30.0
        assert fallback.language == "en-GB"
        assert fallback.site_name == "Shoply"
        assert [image.src for image in fallback.images] == ["https://shop.example.com/media/product-kettle.jpg"]
        assert fallback.author is None
