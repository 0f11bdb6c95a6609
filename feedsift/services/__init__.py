"""Services layer for FeedSift.

Organized by feature:
- collector: Filtering, deduplication, scoring and the per-source pipeline
- distribution: Category classification and source weight rebalancing
- preview: Preview ranking, auto-selection and summarization
"""
