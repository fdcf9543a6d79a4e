#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Embedded stylesheets for self-contained HTML output.

Both stylesheets carry a prefers-color-scheme dark palette and print rules, so
exported files render without any external resource.
"""

ANALYSIS_REPORT_STYLES = """
    :root {
      --color-bg: #ffffff;
      --color-text: #1f2937;
      --color-text-secondary: #6b7280;
      --color-border: #e5e7eb;
      --color-success: #10b981;
      --color-warning: #f59e0b;
      --color-error: #ef4444;
      --color-info: #3b82f6;
      --color-excellent: #10b981;
      --color-good: #22c55e;
      --color-fair: #f59e0b;
      --color-poor: #f97316;
      --color-critical: #ef4444;
    }

    @media (prefers-color-scheme: dark) {
      :root {
        --color-bg: #111827;
        --color-text: #f9fafb;
        --color-text-secondary: #9ca3af;
        --color-border: #374151;
      }
    }

    * { box-sizing: border-box; margin: 0; padding: 0; }

    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background-color: var(--color-bg);
      color: var(--color-text);
      line-height: 1.6;
    }

    .container { max-width: 1200px; margin: 0 auto; padding: 2rem; }

    .report-header {
      text-align: center;
      margin-bottom: 3rem;
      padding-bottom: 2rem;
      border-bottom: 1px solid var(--color-border);
    }
    .report-header .logo { font-size: 1.25rem; font-weight: 600; color: var(--color-info); margin-bottom: 1rem; }
    .report-header h1 { font-size: 2rem; margin-bottom: 1rem; }
    .report-meta { display: flex; justify-content: center; gap: 2rem; color: var(--color-text-secondary); }

    .section { margin-bottom: 2rem; border: 1px solid var(--color-border); border-radius: 8px; overflow: hidden; }
    .section-header {
      display: flex;
      justify-content: space-between;
      align-items: center;
      padding: 1rem 1.5rem;
      background-color: var(--color-border);
      cursor: pointer;
      user-select: none;
    }
    .section-header:hover { opacity: 0.9; }
    .section-header h2 { font-size: 1.25rem; font-weight: 600; }
    .section-header .badge { padding: 0.25rem 0.75rem; border-radius: 9999px; font-size: 0.875rem; font-weight: 500; }
    .section-content { padding: 1.5rem; }
    .section.collapsed .section-content { display: none; }

    .health-score { text-align: center; padding: 2rem; }
    .health-score .score { font-size: 4rem; font-weight: 700; }
    .health-score .rating { font-size: 1.5rem; text-transform: capitalize; }
    .health-score.excellent .score, .health-score.excellent .rating { color: var(--color-excellent); }
    .health-score.good .score, .health-score.good .rating { color: var(--color-good); }
    .health-score.fair .score, .health-score.fair .rating { color: var(--color-fair); }
    .health-score.poor .score, .health-score.poor .rating { color: var(--color-poor); }
    .health-score.critical .score, .health-score.critical .rating { color: var(--color-critical); }

    .breakdown-grid {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
      gap: 1rem;
      margin-top: 2rem;
    }
    .breakdown-item { padding: 1rem; border: 1px solid var(--color-border); border-radius: 8px; }
    .breakdown-item .label { font-size: 0.875rem; color: var(--color-text-secondary); }
    .breakdown-item .value { font-size: 1.5rem; font-weight: 600; }

    table { width: 100%; border-collapse: collapse; }
    th, td { padding: 0.75rem; text-align: left; border-bottom: 1px solid var(--color-border); }
    th { font-weight: 600; background-color: var(--color-border); }

    .severity-critical { color: var(--color-critical); }
    .severity-high { color: var(--color-error); }
    .severity-medium { color: var(--color-warning); }
    .severity-low { color: var(--color-info); }

    .fix-card { padding: 1rem; border: 1px solid var(--color-border); border-radius: 8px; margin-bottom: 1rem; }
    .fix-card.quick-win { border-color: var(--color-success); background-color: rgba(16, 185, 129, 0.05); }
    .fix-card .title { font-weight: 600; margin-bottom: 0.5rem; }
    .quick-win-badge { color: var(--color-success); margin-left: 0.5rem; }
    .fix-card .meta { display: flex; gap: 1rem; font-size: 0.875rem; color: var(--color-text-secondary); }

    code {
      font-family: 'SF Mono', 'Fira Code', 'Fira Mono', monospace;
      font-size: 0.875em;
      padding: 0.125rem 0.25rem;
      background-color: var(--color-border);
      border-radius: 3px;
    }

    .report-footer {
      margin-top: 3rem;
      padding-top: 2rem;
      border-top: 1px solid var(--color-border);
      text-align: center;
      color: var(--color-text-secondary);
      font-size: 0.875rem;
    }

    @media print {
      .section-header { cursor: default; }
      .section.collapsed .section-content { display: block; }
      body { font-size: 12pt; }
      .container { max-width: none; padding: 0; }
    }
"""

DIAGNOSTIC_REPORT_STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }

    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      line-height: 1.6;
      color: #1f2937;
      background: #ffffff;
      max-width: 900px;
      margin: 0 auto;
      padding: 2rem;
    }

    @media (prefers-color-scheme: dark) {
      body { background: #111827; color: #f9fafb; }
      .section { background: #1f2937; border-color: #374151; }
      .severity-badge { border-color: #374151; }
      code { background: #374151; color: #e5e7eb; }
      .toc a { color: #60a5fa; }
      table { border-color: #374151; }
      th { background: #374151; }
      td { border-color: #374151; }
      .code-block { background: #1e293b; border-color: #374151; }
    }

    .report-header { text-align: center; margin-bottom: 2rem; padding-bottom: 1rem; border-bottom: 2px solid #e5e7eb; }
    .report-header h1 { font-size: 1.75rem; margin-bottom: 0.5rem; }
    .report-header .subtitle { color: #6b7280; font-size: 0.875rem; }

    .toc { margin: 1.5rem 0; padding: 1rem 1.5rem; background: #f9fafb; border-radius: 8px; border: 1px solid #e5e7eb; }
    .toc h2 { font-size: 1rem; margin-bottom: 0.5rem; }
    .toc ul { list-style: none; padding-left: 0; }
    .toc li { margin: 0.25rem 0; }
    .toc a { color: #2563eb; text-decoration: none; }
    .toc a:hover { text-decoration: underline; }

    .section { margin: 1.5rem 0; padding: 1.25rem; background: #f9fafb; border: 1px solid #e5e7eb; border-radius: 8px; }
    .section h2 { font-size: 1.25rem; margin-bottom: 0.75rem; padding-bottom: 0.5rem; border-bottom: 1px solid #e5e7eb; }

    .severity-badge {
      display: inline-block;
      padding: 0.125rem 0.5rem;
      border-radius: 9999px;
      font-size: 0.75rem;
      font-weight: 600;
      text-transform: uppercase;
    }
    .severity-critical { background: #fef2f2; color: #dc2626; border: 1px solid #fecaca; }
    .severity-high { background: #fff7ed; color: #ea580c; border: 1px solid #fed7aa; }
    .severity-medium { background: #fffbeb; color: #d97706; border: 1px solid #fde68a; }
    .severity-low { background: #f0fdf4; color: #16a34a; border: 1px solid #bbf7d0; }

    .effort-badge {
      display: inline-block;
      padding: 0.125rem 0.5rem;
      border-radius: 4px;
      font-size: 0.75rem;
      background: #eff6ff;
      color: #2563eb;
      border: 1px solid #bfdbfe;
    }

    .metric-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(140px, 1fr)); gap: 0.75rem; margin: 0.75rem 0; }
    .metric-card { padding: 0.75rem; text-align: center; background: white; border-radius: 6px; border: 1px solid #e5e7eb; }
    .metric-value { font-size: 1.5rem; font-weight: 700; color: #1f2937; }
    .metric-label { font-size: 0.75rem; color: #6b7280; }

    table { width: 100%; border-collapse: collapse; margin: 0.75rem 0; font-size: 0.875rem; }
    th, td { padding: 0.5rem 0.75rem; text-align: left; border: 1px solid #e5e7eb; }
    th { background: #f3f4f6; font-weight: 600; }

    .code-block {
      background: #f8fafc;
      border: 1px solid #e2e8f0;
      border-radius: 6px;
      padding: 0.75rem 1rem;
      font-family: 'Fira Code', 'SF Mono', Consolas, monospace;
      font-size: 0.8125rem;
      overflow-x: auto;
      white-space: pre;
      margin: 0.5rem 0;
    }

    code { background: #f3f4f6; padding: 0.125rem 0.25rem; border-radius: 3px; font-size: 0.8125rem; }

    .strategy-card { margin: 0.75rem 0; padding: 1rem; border: 1px solid #e5e7eb; border-radius: 6px; background: white; }
    .strategy-card h3 { margin-bottom: 0.5rem; }

    .pros-cons { display: grid; grid-template-columns: 1fr 1fr; gap: 0.75rem; margin: 0.5rem 0; }
    .pros li::marker { content: '✅ '; }
    .cons li::marker { content: '⚠️ '; }
    .pros, .cons { padding-left: 1.25rem; }

    .step-list { counter-reset: step-counter; list-style: none; padding-left: 0; }
    .step-list li { counter-increment: step-counter; margin: 0.5rem 0; padding-left: 2rem; position: relative; }
    .step-list li::before {
      content: counter(step-counter);
      position: absolute;
      left: 0;
      width: 1.5rem;
      height: 1.5rem;
      background: #3b82f6;
      color: white;
      border-radius: 50%;
      text-align: center;
      font-size: 0.75rem;
      line-height: 1.5rem;
    }

    .ripple-tree ul { padding-left: 1.25rem; }

    .report-footer {
      margin-top: 2rem;
      padding-top: 1rem;
      border-top: 1px solid #e5e7eb;
      text-align: center;
      font-size: 0.75rem;
      color: #9ca3af;
    }

    @media print {
      body { padding: 0; max-width: none; }
      .section { page-break-inside: avoid; break-inside: avoid; }
      .report-header { page-break-after: avoid; }
      .toc { page-break-after: always; }
      @page { margin: 2cm; }
    }
"""

COLLAPSIBLE_SECTIONS_SCRIPT = """
    document.querySelectorAll('.section-header').forEach(function (header) {
      header.addEventListener('click', function () {
        header.parentElement.classList.toggle('collapsed');
      });
    });
"""
