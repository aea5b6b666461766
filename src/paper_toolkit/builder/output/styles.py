"""
Module: builder.output.styles

Purpose:
    Print stylesheet for rendered papers: A4, narrow margins, serif body
    text and compact board-paper tables.

Key Functions:
    - paper_css(): Stylesheet text for a base font size
"""

from __future__ import annotations


def paper_css(base_font_pt: int = 12, bubbles_per_row: int = 5) -> str:
    """Return the paper stylesheet."""
    return f"""
*, *::before, *::after {{ margin:0; padding:0; box-sizing:border-box; }}
@page {{ size: A4; margin: 6mm 7mm 6mm 7mm; }}
html, body {{ -webkit-print-color-adjust: exact; print-color-adjust: exact; }}
body {{
  font-family: 'Times New Roman', Times, serif;
  font-size: {base_font_pt}pt;
  line-height: 1.2;
  color: #000;
  background: #fff;
}}

.pp-header {{ border: 1px solid #000; }}
.pp-header-body {{
  display: flex; flex-direction: column; align-items: center;
  padding: 3pt 6pt 2pt; text-align: center;
}}
.pp-logo {{ width: 36pt; height: 36pt; object-fit: contain; margin-bottom: 1pt; }}
.pp-custom-header {{ font-size: 8pt; font-style: italic; margin-bottom: 1pt; }}
.pp-custom-subheader {{ font-size: 8pt; margin-top: 1pt; }}
.pp-school-name {{
  font-size: 18pt; font-weight: bold; letter-spacing: 0.3pt;
  text-transform: uppercase; line-height: 1.1;
}}
.pp-exam-type {{ font-size: 10pt; font-weight: bold; margin-top: 1pt; }}
.pp-contact-bar {{
  background: #1a1a1a; color: #fff; display: flex; flex-wrap: wrap;
  justify-content: space-around; padding: 2pt 4pt; font-size: 6pt; gap: 3pt;
}}

.pp-meta {{
  border-left: 1px solid #000; border-right: 1px solid #000;
  border-bottom: 1px solid #000; margin-bottom: 3pt;
}}
.pp-meta-row {{ display: flex; border-bottom: 0.5pt solid #000; }}
.pp-meta-row:last-child {{ border-bottom: none; }}
.pp-meta-cell {{
  flex: 1; display: flex; align-items: center; padding: 4pt 5pt;
  border-right: 0.5pt solid #000; font-size: 9pt;
}}
.pp-meta-cell:last-child {{ border-right: none; }}
.pp-meta-label {{ font-weight: bold; white-space: nowrap; margin-right: 2pt; }}
.pp-meta-value {{ margin-left: 2pt; }}
.pp-meta-line {{ flex: 1; border-bottom: 0.5pt solid #333; height: 10pt; min-width: 50pt; }}

.pp-sec-bar {{
  display: flex; align-items: baseline; gap: 3pt;
  border: 0.5pt solid #000; padding: 1.5pt 3pt; page-break-inside: avoid;
}}
.pp-sec-qnum {{ font-weight: bold; }}
.pp-sec-title {{ font-weight: bold; }}
.pp-sec-instr {{ flex: 1; font-style: italic; font-size: 9pt; }}
.pp-sec-marks {{ font-weight: bold; white-space: nowrap; }}
.pp-sec-note {{ font-size: 9pt; font-weight: bold; padding: 1pt 3pt; }}

.pp-bubbles {{
  display: grid; grid-template-columns: repeat({bubbles_per_row}, 1fr);
  gap: 1pt 4pt; padding: 2pt 3pt; border: 0.5pt solid #000; border-top: none;
}}
.pp-bub-item {{ display: flex; align-items: center; gap: 2pt; font-size: 8pt; }}
.pp-bub-num {{ font-weight: bold; min-width: 14pt; text-align: right; }}
.pp-bub-opts {{ display: flex; gap: 2pt; }}
.pp-bub-opt {{ display: flex; align-items: center; gap: 1pt; }}
.pp-bub-circle {{ width: 8pt; height: 8pt; border: 0.5pt solid #000; border-radius: 50%; }}

.pp-mcq-table {{ width: 100%; border-collapse: collapse; }}
.pp-mcq-tr {{ page-break-inside: avoid; }}
.pp-mcq-num {{ width: 18pt; vertical-align: top; font-weight: bold; padding: 1pt 2pt; }}
.pp-mcq-body {{ padding: 1pt 2pt; }}
.pp-mcq-opts {{ display: grid; grid-template-columns: repeat(4, 1fr); gap: 0 4pt; }}
.pp-mcq-opt-lbl {{ font-weight: bold; }}

.pp-divider {{
  page-break-before: always; break-before: page; text-align: center;
  font-weight: bold; letter-spacing: 1pt; border-bottom: 1px solid #000;
  margin: 2pt 0 3pt; padding-bottom: 1pt;
}}

.pp-short-row {{ display: flex; gap: 3pt; padding: 1pt 3pt; page-break-inside: avoid; }}
.pp-short-num {{ min-width: 22pt; font-weight: bold; }}
.pp-short-text {{ flex: 1; }}
.pp-short-marks, .pp-long-marks, .pp-long-part-marks {{ white-space: nowrap; font-weight: bold; }}

.pp-long-item {{ padding: 2pt 3pt; page-break-inside: avoid; }}
.pp-long-header {{ display: flex; gap: 3pt; }}
.pp-long-qnum {{ font-weight: bold; min-width: 26pt; }}
.pp-long-text {{ flex: 1; }}
.pp-long-lead {{ padding-left: 26pt; }}
.pp-long-parts {{ padding-left: 26pt; }}
.pp-long-part {{ display: flex; gap: 3pt; }}
.pp-long-part-lbl {{ font-weight: bold; min-width: 16pt; }}
.pp-long-part-text {{ flex: 1; }}

.pp-writing-prompt {{ font-style: italic; padding: 2pt 3pt; }}
.pp-lines {{ padding: 0 3pt; }}
.pp-line {{ border-bottom: 0.5pt solid #555; height: 16pt; }}

.pp-page-break {{ page-break-before: always; break-before: page; }}
.omr-sheet {{ border: 1px solid #000; padding: 6pt; }}
.omr-header {{ text-align: center; margin-bottom: 4pt; }}
.omr-info {{ display: flex; gap: 8pt; margin-bottom: 4pt; }}
.omr-field {{ flex: 1; display: flex; gap: 2pt; align-items: flex-end; }}
.omr-line {{ flex: 1; border-bottom: 0.5pt solid #000; height: 12pt; }}
.omr-instructions {{ font-size: 8pt; margin-bottom: 4pt; }}
.omr-row {{ display: flex; align-items: center; gap: 4pt; margin-bottom: 2pt; font-size: 8pt; }}
.omr-range {{ font-weight: bold; min-width: 32pt; }}
.omr-q {{ display: flex; align-items: center; gap: 1pt; }}
.omr-num {{ font-weight: bold; min-width: 12pt; text-align: right; }}
.omr-bubbles {{ display: flex; align-items: center; gap: 1pt; }}
.omr-circle {{ width: 8pt; height: 8pt; border: 0.5pt solid #000; border-radius: 50%; }}

.math-error {{ color: #b00020; font-family: monospace; }}
.math-display {{ display: block; text-align: center; margin: 2pt 0; }}

.pp-footer {{ text-align: center; font-size: 7pt; color: #555; margin-top: 6pt; }}
"""
