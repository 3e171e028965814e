"""site_mirror.crawler: обход сайта, извлечение ссылок и локальное хранилище."""

from site_mirror.crawler.crawler import SiteCrawler
from site_mirror.crawler.fetcher import Fetcher, ResourceFetcher
from site_mirror.crawler.frontier import Frontier
from site_mirror.crawler.link_extractor import LinkExtractor
from site_mirror.crawler.models import CrawlSummary, FrontierEntry, Resource
from site_mirror.crawler.store import LocalStore

__all__ = [
    "SiteCrawler",
    "Fetcher",
    "ResourceFetcher",
    "Frontier",
    "LinkExtractor",
    "CrawlSummary",
    "FrontierEntry",
    "Resource",
    "LocalStore",
]
