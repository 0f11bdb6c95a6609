"""FeedSift: content scoring, filtering and distribution steering."""
