"""Gateway to the third-party generative model API (Google Gemini).

Single pass-through calls: no queueing, retries or connection pooling.
"""
