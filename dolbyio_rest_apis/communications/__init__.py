"""Communications APIs: conferences, recording, streaming and Monitor.

RULES:
- Conference, remix, streaming and Monitor calls go to the legacy host
  (Hostnames.comms_legacy); client tokens and recording use Hostnames.comms()
- Authenticate with a BearerTokenCredential from get_api_access_token()
"""
