"""Media APIs: processing jobs, job listing, file I/O and webhooks.

RULES:
- Every call goes to Hostnames.mapi (api.dolby.com)
- Authenticate with ApiKeyCredential(api_key) or a BearerTokenCredential
  from media.authentication.get_access_token()
- Job content is passed through as a JSON string; the SDK does not model
  the per-API job options
"""
