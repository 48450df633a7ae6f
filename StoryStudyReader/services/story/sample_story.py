"""Built-in sample story and its vocabulary, used for offline mode."""
from __future__ import annotations

SAMPLE_JAPANESE = """昔々、ローマという美しい都市があった。その都市は古代から続く歴史と文化で有名だった。

ある日、田中という名前の若い日本人観光客がローマを訪れた。彼は建築と歴史に非常に興味があった。コロッセオを見たとき、彼は古代ローマ帝国の偉大さに圧倒された。

「こんなに壮大な建物を見たのは初めてだ」と彼は思った。ガイドブックを読みながら、彼は古代ローマ人の生活について学んだ。グラディエーターたちがここで戦っていたことを想像すると、とても興奮した。

その後、彼はバチカン市国を訪れた。システィーナ礼拝堂のミケランジェロの天井画を見上げたとき、芸術の美しさに感動で涙が出そうになった。

夕方になると、田中はトレビの泉のそばに座って、一日の思い出を振り返った。「この旅行は一生忘れられないだろう」と彼は心から思った。"""

SAMPLE_ENGLISH = """Long ago, there was a beautiful city called Rome. This city was famous for its history and culture that continued from ancient times.

One day, a young Japanese tourist named Tanaka visited Rome. He was very interested in architecture and history. When he saw the Colosseum, he was overwhelmed by the greatness of the ancient Roman Empire.

"This is the first time I've seen such a magnificent building," he thought. While reading his guidebook, he learned about the life of ancient Romans. When he imagined gladiators fighting here, he became very excited.

Afterwards, he visited Vatican City. When he looked up at Michelangelo's ceiling paintings in the Sistine Chapel, he was so moved by the beauty of art that he almost cried.

In the evening, Tanaka sat by the Trevi Fountain and reflected on the day's memories. "I will never forget this trip," he thought from the bottom of his heart."""

# word -> (reading, meaning)
SAMPLE_VOCABULARY = {
    "昔々": ("むかしむかし", "long ago, once upon a time"),
    "美しい": ("うつくしい", "beautiful"),
    "都市": ("とし", "city"),
    "古代": ("こだい", "ancient times"),
    "文化": ("ぶんか", "culture"),
    "有名": ("ゆうめい", "famous"),
    "観光客": ("かんこうきゃく", "tourist"),
    "建築": ("けんちく", "architecture"),
    "歴史": ("れきし", "history"),
    "興味": ("きょうみ", "interest"),
    "圧倒": ("あっとう", "to overwhelm"),
    "壮大": ("そうだい", "magnificent, grand"),
    "建物": ("たてもの", "building"),
    "帝国": ("ていこく", "empire"),
    "偉大": ("いだい", "great"),
    "想像": ("そうぞう", "imagination"),
    "興奮": ("こうふん", "excitement"),
    "天井画": ("てんじょうが", "ceiling painting"),
    "芸術": ("げいじゅつ", "art"),
    "感動": ("かんどう", "emotion, impression"),
    "思い出": ("おもいで", "memories"),
    "振り返る": ("ふりかえる", "to look back, reflect"),
    "一生": ("いっしょう", "whole life, lifetime"),
    "忘れられない": ("わすれられない", "unforgettable"),
}
