from ingest_news.models import FeedSource

FEEDS = {
    # Google News search: AI / 人工知能 (Japanese edition)
    "google-ai-ja": FeedSource(
        name="google-ai-ja",
        url="https://news.google.com/rss/search?q=AI+OR+%E4%BA%BA%E5%B7%A5%E7%9F%A5%E8%83%BD&hl=ja&gl=JP&ceid=JP:ja",
        lang="JP",
        category="AIニュース",
    ),
    # Google News search: 生成AI / LLM / マルチモーダル (Japanese edition)
    "google-genai-ja": FeedSource(
        name="google-genai-ja",
        url="https://news.google.com/rss/search?q=%E7%94%9F%E6%88%90AI+OR+LLM+OR+%E3%83%9E%E3%83%AB%E3%83%81%E3%83%A2%E3%83%BC%E3%83%80%E3%83%AB&hl=ja&gl=JP&ceid=JP:ja",
        lang="JP",
        category="生成AI",
    ),
    # Google News search: AI model / LLM (US edition)
    "google-models-en": FeedSource(
        name="google-models-en",
        url="https://news.google.com/rss/search?q=AI+model+OR+LLM&hl=en-US&gl=US&ceid=US:en",
        lang="EN",
        category="Models",
    ),
    # Google News search: AI research / machine learning (US edition)
    "google-research-en": FeedSource(
        name="google-research-en",
        url="https://news.google.com/rss/search?q=AI+research+OR+machine+learning&hl=en-US&gl=US&ceid=US:en",
        lang="EN",
        category="Research",
    ),
}
