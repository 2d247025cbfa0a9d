#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
sync_from_r2.py

Baixa um CSV exportado (dias ou horários) do Cloudflare R2 (S3) e envia
para o endpoint de upload da Bell Schedule API.

Requisitos (no .venv):
  pip install boto3 requests python-dotenv

ENV obrigatórias:
  API_BASE_URL=http://127.0.0.1:8000
  UPLOAD_KEY=...
  UPLOAD_KIND=days | schedules

ENV (R2, se LOCAL_PATH não estiver definido):
  R2_ENDPOINT=https://<accountid>.r2.cloudflarestorage.com
  R2_BUCKET=...
  R2_ACCESS_KEY_ID=...
  R2_SECRET_ACCESS_KEY=...
  R2_KEY=exports/current/days.csv

ENV opcionais:
  LOCAL_PATH=tmp/days.csv        (pula o download e usa o arquivo local)
  OUT_PATH=tmp/upload.csv
  REQUEST_TIMEOUT=120            (segundos)
"""

from __future__ import annotations

import json
import os
from typing import Any, Tuple

import boto3
import requests
from dotenv import load_dotenv

KINDS = ("days", "schedules")


# ----------------------------
# Helpers
# ----------------------------

def die(msg: str, code: int = 1) -> None:
    print(f"[ERRO] {msg}")
    raise SystemExit(code)


def env_required(name: str) -> str:
    v = os.getenv(name)
    if not v:
        die(f"Variável de ambiente obrigatória não definida: {name}")
    return v


# ----------------------------
# R2
# ----------------------------

def r2_client() -> Any:
    return boto3.client(
        "s3",
        endpoint_url=env_required("R2_ENDPOINT"),
        aws_access_key_id=env_required("R2_ACCESS_KEY_ID"),
        aws_secret_access_key=env_required("R2_SECRET_ACCESS_KEY"),
        region_name="auto",
    )


def download_from_r2(bucket: str, key: str, out_path: str) -> None:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    r2_client().download_file(bucket, key, out_path)
    print(f"OK download: {key} -> {out_path}")


# ----------------------------
# API
# ----------------------------

def upload_url(api_base_url: str, kind: str) -> str:
    if kind not in KINDS:
        die(f"UPLOAD_KIND inválido: {kind!r} (use {' ou '.join(KINDS)})")
    return api_base_url.rstrip("/") + f"/upload/{kind}"


def post_csv_upload(
    api_base_url: str,
    kind: str,
    upload_key: str,
    csv_bytes: bytes,
    timeout: int,
) -> Tuple[int, Any]:
    headers = {
        "Authorization": f"Bearer {upload_key}",
        "Content-Type": "text/csv",
        "accept": "application/json",
    }
    resp = requests.post(upload_url(api_base_url, kind), data=csv_bytes, headers=headers, timeout=timeout)
    try:
        body = resp.json()
    except ValueError:
        body = resp.text
    return resp.status_code, body


def print_warnings(body: Any) -> int:
    warnings = body.get("warnings") if isinstance(body, dict) else None
    if not warnings:
        return 0

    print(f"⚠️  {len(warnings)} linha(s) não importada(s):")
    for w in warnings:
        print(f"  - {w.get('Day')!r} {w.get('Description')!r}: {w.get('message')}")
    return len(warnings)


# ----------------------------
# Main
# ----------------------------

def main() -> None:
    load_dotenv()

    request_timeout = int(os.getenv("REQUEST_TIMEOUT", "120"))
    api_base_url = env_required("API_BASE_URL")
    upload_key = env_required("UPLOAD_KEY")
    kind = env_required("UPLOAD_KIND").strip().lower()

    # valida o tipo antes de baixar qualquer coisa
    upload_url(api_base_url, kind)

    path = os.getenv("LOCAL_PATH")
    if not path:
        path = os.getenv("OUT_PATH") or f"tmp/{kind}.csv"
        download_from_r2(env_required("R2_BUCKET"), env_required("R2_KEY"), path)

    with open(path, "rb") as f:
        csv_bytes = f.read()

    if not csv_bytes.strip():
        die(f"Arquivo vazio: {path}")

    print(f"-> POST /upload/{kind} ({len(csv_bytes)} bytes) ...")
    status_code, body = post_csv_upload(api_base_url, kind, upload_key, csv_bytes, timeout=request_timeout)
    print("API status:", status_code)

    if status_code != 200:
        print(json.dumps(body, ensure_ascii=False, indent=2) if isinstance(body, (dict, list)) else body)
        die("API retornou erro no upload. Veja o output acima.", 2)

    print_warnings(body)
    print("✅ Upload concluído com sucesso.")


if __name__ == "__main__":
    main()
