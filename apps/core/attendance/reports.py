import csv
from io import BytesIO, StringIO

from PIL import Image, ImageDraw

LEDGER_HEADERS = (
    'Date',
    'Occupant',
    'Type',
    'Checkout',
    'Check-in',
    'Days',
    'Base Amount',
    'Percentage',
    'Deducted',
)


def _fmt_dt(value):
    return value.strftime('%Y-%m-%d %H:%M') if value else ''


def ledger_rows(entries):
    rows = []
    for entry in entries:
        event = entry.checkout
        rows.append((
            entry.created_at.date().isoformat(),
            entry.occupant_name,
            entry.occupant_type,
            _fmt_dt(event.checkout_time),
            _fmt_dt(event.checkin_time),
            entry.checkout_duration,
            entry.base_amount,
            f'{entry.percentage}%',
            entry.deducted_amount,
        ))
    return rows


def rows_to_csv_bytes(headers, rows):
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue().encode('utf-8')


def table_pdf_bytes(title, headers, rows, footer=''):
    """Render a simple ruled table onto a single PDF page."""
    margin = 20
    col_width = 200
    row_height = 40
    title_height = 50
    footer_height = 40 if footer else 0

    width = margin * 2 + col_width * max(1, len(headers))
    height = title_height + row_height * (max(1, len(rows)) + 1) + footer_height + margin

    image = Image.new('RGB', (width, height), 'white')
    draw = ImageDraw.Draw(image)
    draw.text((margin, 15), title, fill='black')

    max_chars = col_width // 7
    y = title_height
    for row in [headers, *rows]:
        for idx, value in enumerate(row):
            x = margin + idx * col_width
            draw.rectangle((x, y, x + col_width, y + row_height), outline='black')
            text = str(value)
            if len(text) > max_chars:
                text = text[:max_chars - 3] + '...'
            draw.text((x + 6, y + 12), text, fill='black')
        y += row_height

    if footer:
        draw.text((margin, y + 12), footer, fill='black')

    output = BytesIO()
    image.save(output, format='PDF')
    return output.getvalue()
