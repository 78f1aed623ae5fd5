"""
Hypothesis test backends.

Available backends:
    CPUHypothesisBackend: dispatches on HypothesisDesign.test_type
"""
