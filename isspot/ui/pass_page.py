from datetime import timedelta

from PIL import Image, ImageDraw

from isspot.models import PassBoard
from isspot.ui.fonts import load_font

WHITE = (255, 255, 255)
GREEN = (80, 220, 120)
GREY = (140, 140, 140)


def format_countdown(delta: timedelta) -> str:
    secs = max(0, int(delta.total_seconds()))
    h, rem = divmod(secs, 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}h{m:02d}m"
    return f"{m}m{s:02d}s"


def status_bar(draw: ImageDraw.ImageDraw, board: PassBoard, font, display_cfg: dict):
    w = display_cfg["w"]
    if board.loading:
        flag = "LOADING"
    elif board.stale:
        flag = "STALE"
    else:
        flag = "OK"
    draw.text((6, 4), f"ISS  {flag}", font=font, fill=WHITE)
    s2 = board.now.strftime("%H:%M")
    tw = draw.textlength(s2, font=font)
    draw.text((w - tw - 6, 4), s2, font=font, fill=WHITE)


def render_pass_page(board: PassBoard, display_cfg: dict) -> Image.Image:
    w, h = display_cfg["w"], display_cfg["h"]
    img = Image.new("RGB", (w, h), (0, 0, 0))
    draw = ImageDraw.Draw(img)

    font_small = load_font(14)
    font_mid = load_font(22)
    font_big = load_font(40)

    status_bar(draw, board, font_small, display_cfg)

    if board.current is not None:
        draw.text((10, 36), "VISIBLE NOW", font=font_mid, fill=GREEN)
        left = board.current.end_time - board.now
        draw.text((10, 70), format_countdown(left), font=font_big, fill=GREEN)
        draw.text((10, 120), "left in pass", font=font_small, fill=GREY)
    else:
        draw.text((10, 36), "NEXT PASS", font=font_mid, fill=WHITE)

    if board.upcoming is not None:
        up = board.upcoming
        y = 150 if board.current is not None else 70
        draw.text((10, y), up.risetime.strftime("%a %H:%M"), font=font_big, fill=WHITE)
        draw.text((10, y + 50), f"in {format_countdown(up.spottable(board.now))}", font=font_mid, fill=WHITE)
        draw.text((10, y + 80), f"duration {int(up.duration.total_seconds())}s", font=font_small, fill=GREY)
    elif board.loading:
        draw.text((10, 120), "Loading...", font=font_mid, fill=WHITE)
    elif board.current is None:
        draw.text((10, 120), "No visible pass", font=font_mid, fill=WHITE)

    footer = []
    if board.daylight is not None:
        footer.append(f"sun {board.daylight.sunrise:%H:%M}-{board.daylight.sunset:%H:%M}")
    footer.append(f"{board.pass_count} passes")
    draw.text((10, h - 44), "  ".join(footer)[:32], font=font_small, fill=GREY)
    if board.err:
        draw.text((10, h - 24), f"err:{board.err}"[:32], font=font_small, fill=GREY)

    return img
