"""dump_it.parser: разбор sitemap, HTML-метаданных и блоков контента."""
