import io
import logging
import os

import requests
from django.conf import settings
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 900, 600
BACKGROUND = (30, 30, 30)
TEXT_COLOR = (255, 255, 255)
FLAG_SIZE = (60, 40)
FLAG_TIMEOUT = 10


def get_summary_image_path():
    return str(settings.SUMMARY_IMAGE_PATH)


def load_fonts():
    try:
        return ImageFont.truetype('DejaVuSans-Bold.ttf', 26), ImageFont.truetype('DejaVuSans.ttf', 20)
    except OSError:
        default = ImageFont.load_default()
        return default, default


def load_flag(url):
    if not url:
        raise ValueError('no flag url')
    resp = requests.get(url, timeout=FLAG_TIMEOUT)
    resp.raise_for_status()
    return Image.open(io.BytesIO(resp.content))


def render_summary_image(total, top_countries, timestamp, flag_loader=load_flag):
    """
    Draw the summary card: dataset size, refresh time and the top countries
    by estimated GDP, each with its flag when one can be loaded.
    """
    img = Image.new('RGB', (WIDTH, HEIGHT), color=BACKGROUND)
    d = ImageDraw.Draw(img)
    font_title, font_text = load_fonts()

    d.text((50, 50), f'Total Countries: {total}', font=font_title, fill=TEXT_COLOR)
    d.text((50, 90), f'Last Refreshed: {timestamp}', font=font_title, fill=TEXT_COLOR)
    d.text((50, 150), 'Top 5 Countries by Estimated GDP:', font=font_title, fill=TEXT_COLOR)

    y = 210
    flag_x = 60
    text_x = flag_x + FLAG_SIZE[0] + 20
    for i, c in enumerate(top_countries, start=1):
        try:
            flag = flag_loader(c.flag_url).convert('RGBA').resize(FLAG_SIZE)
            img.paste(flag, (flag_x, y), flag)
        except Exception as exc:
            # the text line is still drawn without a flag
            logger.warning("Could not load flag for %s: %s", c.name, exc)

        line = f'{i}. {c.name} - {round(c.estimated_gdp or 0):,}'
        d.text((text_x, y + 8), line, font=font_text, fill=TEXT_COLOR)
        y += 60

    if not top_countries:
        d.text((text_x, y + 8), 'No GDP data available.', font=font_text, fill=TEXT_COLOR)

    return img


def generate_summary_image(total, top_countries, timestamp, out_path=None, flag_loader=load_flag):
    out_path = out_path or get_summary_image_path()
    os.makedirs(os.path.dirname(out_path) or '.', exist_ok=True)
    img = render_summary_image(total, top_countries, timestamp, flag_loader=flag_loader)
    img.save(out_path, 'PNG')
    return out_path
