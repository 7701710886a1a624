"""Core functionality for appgather.

This package exposes the walking and classification API:
- Walker: concurrently walks a source tree and classifies files into buckets.
- gather_sources: walks several trees and merges them in overlay order.
- Classifier: the ordered rule list used for each file.

See walker.py and classifier.py for implementation details.
"""

from appgather.core.classifier import Classification, Classifier
from appgather.core.walker import Source, Walker, gather_sources

# Reason: Only expose the main walking and classification API to consumers of
# the core package.
__all__ = ["Classification", "Classifier", "Source", "Walker", "gather_sources"]
