"""
どこで: `util` パッケージ。
何を: 構成ファイル読み込みなどの補助関数。
"""
