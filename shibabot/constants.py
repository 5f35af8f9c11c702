"""Shared colours, emoji and links used in the bot's embeds."""

EMBED_COLOR = 0xC5B875
ERROR_EMBED_COLOR = 0xF53F3C
CONFIRM_EMBED_COLOR = 0x5AEB46

ERROR_EMOJI = "<:shibaCross:1197544989475995739>"
CONFIRM_EMOJI = "<:shibaCheck:1197545020329300049>"

SHIBA_MAIN_IMAGE_URL = "https://i.imgur.com/uau9dGl.jpg"
DOWNSCALED_SHIBA_MAIN_IMAGE_URL = "https://i.imgur.com/bhKokf9.jpg"
RUST_LOGO_URL = "https://i.imgur.com/XGYtTmW.png"
API_THANKS_EMOJI = "https://i.imgur.com/lvQs0Nq.png"
WARNING_EMOJI = "https://i.imgur.com/5pt3keW.png"
LIGHTBULB_ICON = "https://i.imgur.com/p3IjQky.png"
ERROR_AUTHOR_ICON = "https://i.imgur.com/tTvxuiG.png"
DEFAULT_AVATAR_URL = "https://cdn.discordapp.com/embed/avatars/0.png"

INVITE_LINK = (
    "https://discord.com/api/oauth2/authorize?client_id=1195786642150137946"
    "&permissions=8&scope=applications.commands+bot"
)
SUPPORT_SERVER = "[messaging-link]"