"""
Sentiment analysis for CivicPulse.

Processes feedback text through the pipeline:
- Language Detector
- Category Detector
- Sentiment Classifier
- Aggregator
"""
