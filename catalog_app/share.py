# catalog_app/share.py
import logging
import shutil
import subprocess
import sys
import webbrowser
from typing import Callable, Optional
from urllib.parse import quote

logger = logging.getLogger("catalog_browser.share")

REGISTER_LINK = "https://amp.tuppafrica.co.za/register/160191/368"
SHARE_MESSAGE = "Register to Tupperware using my self-register link:"

PLATFORMS = ("whatsapp", "facebook", "x", "instagram")

def _enc(s: str) -> str:
    # same reserved set as JS encodeURIComponent
    return quote(s, safe="-_.!~*'()")

def share_url(platform: str, link: str = REGISTER_LINK, message: str = SHARE_MESSAGE) -> str:
    link = link.strip()
    if platform == "whatsapp":
        return f"https://wa.me/?text={_enc(f'{message} {link}')}"
    if platform == "facebook":
        return f"https://www.facebook.com/sharer/sharer.php?u={_enc(link)}"
    if platform == "x":
        return f"https://twitter.com/intent/tweet?text={_enc(message)}&url={_enc(link)}"
    if platform == "instagram":
        # no prefill from outside the app; the link goes to the clipboard instead
        return "https://www.instagram.com/"
    raise ValueError(f"unknown share platform: {platform}")

# ---------------------------
# Clipboard
# ---------------------------
def _clipboard_command():
    if sys.platform == "darwin":
        return ["pbcopy"]
    if sys.platform.startswith("win"):
        return ["clip"]
    for cmd in (["wl-copy"], ["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]):
        if shutil.which(cmd[0]):
            return cmd
    return None

def system_copy(text: str) -> None:
    cmd = _clipboard_command()
    if cmd is None:
        raise OSError("no clipboard tool available")
    subprocess.run(cmd, input=text.encode("utf-8"), check=True, timeout=5)

def copy_link(
    link: str = REGISTER_LINK,
    message: str = "Link copied to clipboard.",
    copier: Callable[[str], None] = system_copy,
    select: Optional[Callable[[str], None]] = None,
) -> str:
    """
    Copy `link` and return the status text. When the clipboard is unavailable the
    link is handed to `select` so the user can copy it by hand.
    """
    try:
        copier(link)
        return message
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("clipboard copy failed: %s", e)
        if select is not None:
            select(link)
        return f"{message} (fallback)"

def share(
    platform: str,
    link: str = REGISTER_LINK,
    opener: Callable[[str], bool] = webbrowser.open,
    **copy_kwargs,
) -> str:
    url = share_url(platform, link)
    status = ""
    if platform == "instagram":
        status = copy_link(link, "Link copied. Paste it into Instagram (bio/story/DM).", **copy_kwargs)
    opener(url)
    logger.info("Shared via %s", platform)
    return status or f"Opened {platform} share."
