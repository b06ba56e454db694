"""Launch classification state.

The classification is computed once per process by
:class:`~appruntime.classifier.LaunchClassifier` and published into a
:class:`RuntimeInfoStore`; everything else only observes it.
"""

from appruntime.state.classification import RuntimeClassification
from appruntime.state.policy import classify_launch
from appruntime.state.store import RuntimeInfoStore

__all__ = ["RuntimeClassification", "RuntimeInfoStore", "classify_launch"]
