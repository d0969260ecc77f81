# 🧪 tests/infrastructure/parsers/conftest.py
"""🧪 HTML-фікстури сторінок товару."""

import pytest

FULL_PRODUCT_HTML = """
<html>
<head>
  <title>Baby Dress | AliExpress</title>
  <meta property="og:image" content="https://ae01.alicdn.com/og.jpg">
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Product", "name": "LD name",
   "description": "LD desc", "image": ["https://ae01.alicdn.com/ld1.jpg"],
   "offers": {"@type": "Offer", "price": "19.99", "priceCurrency": "EUR",
              "availability": "https://schema.org/InStock",
              "seller": {"@type": "Organization", "name": "LD Store",
                         "url": "https://www.aliexpress.com/store/555"}}}
  </script>
  <script>
    window.runParams = {"skuMap": {"101": {"skuName": "Red", "price": "US $12.99", "stock": 5},
                                   "102": {"skuName": "Blue", "price": 13.5, "stock": 0}}};
  </script>
</head>
<body>
  <h1 data-pl="product-title">  Summer   Baby Dress  </h1>
  <div class="product-price-current">US $12.99</div>
  <div class="price-original">US $25.00</div>
  <div class="images-gallery">
    <img src="//ae01.alicdn.com/kf/abc.jpg_220x220.jpg">
    <img src="https://ae01.alicdn.com/kf/def_640x640.jpg">
    <img src="/static/placeholder.png">
  </div>
  <video><source src="//cloud.video.alibaba.com/v1.mp4"></video>
  <div class="product-description">Soft cotton dress</div>
  <table class="specification">
    <tr><td>Material</td><td>Cotton</td></tr>
    <tr><th>Season</th><td>Summer</td></tr>
  </table>
  <div class="shipping-option">Standard Shipping $2.99 Delivery in 15 days via Cainiao</div>
  <div class="store-info">
    <a href="//www.aliexpress.com/store/1234">Happy Kids Store</a>
    <span class="store-rating">4.8 out of 5</span>
  </div>
  <p>Only 37 pieces available</p>
</body>
</html>
"""

JSON_LD_ONLY_HTML = """
<html>
<head>
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Product", "name": "Linen Shirt",
   "image": "//ae01.alicdn.com/kf/shirt.jpg",
   "additionalProperty": [{"@type": "PropertyValue", "name": "Fabric", "value": "Linen"}],
   "offers": {"@type": "Offer", "price": "19.99", "priceCurrency": "EUR",
              "availability": "https://schema.org/InStock",
              "seller": {"@type": "Organization", "name": "LD Store",
                         "url": "https://www.aliexpress.com/store/555"}}}
  </script>
</head>
<body><p>Nothing else here</p></body>
</html>
"""

EMPTY_HTML = "<html><head></head><body></body></html>"


@pytest.fixture
def full_html() -> str:
    return FULL_PRODUCT_HTML


@pytest.fixture
def ld_only_html() -> str:
    return JSON_LD_ONLY_HTML


@pytest.fixture
def empty_html() -> str:
    return EMPTY_HTML
