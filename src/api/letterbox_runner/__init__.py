"""
どこで: `api.letterbox_runner`
何を: `api.letterbox` の内部ヘルパ（設定解決・ホスト/コントローラ初期化・キー操作）。
なぜ: ランナー本体を薄く保ち、純粋関数部分をテスト可能にするため。
"""
