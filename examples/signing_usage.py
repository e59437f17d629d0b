"""
Example: Using the rawtweet pipeline from Python instead of the CLI.

This shows the separation between:
- Signing: pure, reproducible once nonce and timestamp are fixed
- Dispatch: the one side-effecting step
"""

from rawtweet.models.settings import load_settings
from rawtweet.models.template import load_template
from rawtweet.oauth import Method, OAuth1Signer
from rawtweet.runner import run_request


# =============================================================================
# Example 1: Inspect a signature without sending anything
# =============================================================================
settings = load_settings()
signer = OAuth1Signer(settings.credentials(), signing_key_mode=settings.signing_key_mode)

signed = signer.sign(
    Method.GET,
    "https://api.twitter.com/1.1/search/tweets.json",
    {"q": "a b", "count": 10},
    nonce="abcdef0123456789abcdef0123456789",  # ← Fixed for reproducibility
    timestamp="1609459200",
)
print(f"Base string:   {signed.base_string}")
print(f"Authorization: {signed.authorization}")


# =============================================================================
# Example 2: Send a template with overrides
# =============================================================================
template = load_template("examples/templates/user_timeline.json")
result = run_request(template, ["screen_name=TwitterDev", "count=5"], settings)

print(f"HTTP {result.status_code}")
print(result.body)
