"""Shared X (Twitter) web API constants.

This module centralizes the GraphQL base URL, operation identifiers, the
capability-flag maps the service expects verbatim and the browser-like
header set, so the endpoint modules can stay small and focused.
"""

from __future__ import annotations

BASE_URL = "https://x.com/i/api/graphql"

# GraphQL operation ids as served to the web client
USER_TWEETS_QUERY_ID = "p8aXzC3mi1Zjdv4H1E0O1Q"
USER_BY_SCREEN_NAME_QUERY_ID = "IHyLL37gkgw1TgIXAL6Wlw"

# Per-call batch size; the service returns up to this many items per page
DEFAULT_PAGE_SIZE = 40

# Capability flags required by the UserTweets operation
USER_TWEETS_FEATURES: dict[str, bool] = {
    "rweb_video_screen_enabled": False,
    "payments_enabled": False,
    "profile_label_improvements_pcf_label_in_post_enabled": True,
    "rweb_tipjar_consumption_enabled": True,
    "verified_phone_label_enabled": True,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "responsive_web_graphql_timeline_navigation_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "premium_content_api_read_enabled": False,
    "communities_web_enable_tweet_community_results_fetch": True,
    "c9s_tweet_anatomy_moderator_badge_enabled": True,
    "responsive_web_grok_analyze_button_fetch_trends_enabled": False,
    "responsive_web_grok_analyze_post_followups_enabled": True,
    "responsive_web_jetfuel_frame": True,
    "responsive_web_grok_share_attachment_enabled": True,
    "articles_preview_enabled": True,
    "responsive_web_edit_tweet_api_enabled": True,
    "graphql_is_translatable_rweb_tweet_is_translatable_enabled": True,
    "view_counts_everywhere_api_enabled": True,
    "longform_notetweets_consumption_enabled": True,
    "responsive_web_twitter_article_tweet_consumption_enabled": True,
    "tweet_awards_web_tipping_enabled": False,
    "responsive_web_grok_show_grok_translated_post": False,
    "responsive_web_grok_analysis_button_from_backend": True,
    "creator_subscriptions_quote_tweet_preview_enabled": False,
    "freedom_of_speech_not_reach_fetch_enabled": True,
    "standardized_nudges_misinfo": True,
    "tweet_with_visibility_results_prefer_gql_limited_actions_policy_enabled": True,
    "longform_notetweets_rich_text_read_enabled": True,
    "longform_notetweets_inline_media_enabled": True,
    "responsive_web_grok_image_annotation_enabled": True,
    "responsive_web_grok_community_note_auto_translation_is_enabled": False,
    "responsive_web_enhance_cards_enabled": False,
}

USER_TWEETS_FIELD_TOGGLES: dict[str, bool] = {
    "withArticlePlainText": False,
}

# Fixed boolean variables sent with every UserTweets request
USER_TWEETS_FLAGS: dict[str, bool] = {
    "includePromotedContent": True,
    "withQuickPromoteEligibilityTweetFields": True,
    "withVoice": True,
}

# Capability flags required by the UserByScreenName operation
USER_BY_SCREEN_NAME_FEATURES: dict[str, bool] = {
    "hidden_profile_subscriptions_enabled": True,
    "payments_enabled": False,
    "profile_label_improvements_pcf_label_in_post_enabled": True,
    "rweb_tipjar_consumption_enabled": True,
    "verified_phone_label_enabled": True,
    "subscriptions_verification_info_is_identity_verified_enabled": True,
    "subscriptions_verification_info_verified_since_enabled": True,
    "highlights_tweets_tab_ui_enabled": True,
    "responsive_web_twitter_article_notes_tab_enabled": True,
    "subscriptions_feature_can_gift_premium": True,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "responsive_web_graphql_timeline_navigation_enabled": True,
}

USER_BY_SCREEN_NAME_FIELD_TOGGLES: dict[str, bool] = {
    "withAuxiliaryUserLabels": True,
}

# Browser-like headers; the service rejects requests without them.
# authorization and x-csrf-token are added per session by the transport.
BROWSER_HEADERS: dict[str, str] = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "content-type": "application/json",
    "x-twitter-active-user": "yes",
    "x-twitter-auth-type": "OAuth2Session",
    "x-twitter-client-language": "en",
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-origin",
    "referer": "https://x.com/",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
    ),
}

# Timestamp format of legacy.created_at, e.g. "Wed Oct 10 20:19:24 +0000 2018"
CREATED_AT_FORMAT = "%a %b %d %H:%M:%S %z %Y"
