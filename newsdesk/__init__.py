"""newsdesk — Korean news search, full-text crawling and LLM summaries."""
