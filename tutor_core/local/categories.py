"""本地兜底回复的话题表。

CATEGORIES 的顺序就是匹配优先级，不能调整：
部分关键词在语义上重叠（例如 "study" 与 "language"），排在前面的话题胜出。
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ResponseCategory:
    """一个关键词话题桶。"""

    name: str
    match_keywords: Tuple[str, ...]
    candidate_replies: Tuple[str, ...]

    def matches(self, lowered_message: str) -> bool:
        return any(keyword in lowered_message for keyword in self.match_keywords)


WELCOME_REPLY = (
    "Hello! I'm excited to help you practice English today. "
    "How are you feeling? What would you like to talk about?"
)

# 请求体无法解析时返回的固定回复
APOLOGY_REPLY = "I'm here to help you practice English! What would you like to talk about?"


CATEGORIES: Tuple[ResponseCategory, ...] = (
    ResponseCategory(
        name="greeting",
        match_keywords=("hello", "hi", "hey"),
        candidate_replies=(
            "Hello! It's wonderful to meet you. How has your day been so far?",
            "Hi there! I'm so glad you're here to practice English. What's on your mind today?",
            "Hey! Welcome! I love helping people improve their English. What interests you most?",
        ),
    ),
    ResponseCategory(
        name="well_being",
        match_keywords=("how are you", "how do you do"),
        candidate_replies=(
            "I'm doing fantastic, thank you for asking! I really enjoy our conversations. "
            "How about you? What's been the highlight of your day?",
            "I'm wonderful! I love helping people practice English - it's so rewarding. "
            "How are you feeling about your English progress?",
            "I'm great, thanks! Every conversation teaches me something new too. "
            "What brings you here to practice today?",
        ),
    ),
    ResponseCategory(
        name="weather",
        match_keywords=("weather", "sunny", "rain", "cold", "hot"),
        candidate_replies=(
            "Weather is such a universal topic! What's the weather like where you are right now? "
            "Do you have a favorite type of weather?",
            "I love talking about weather - it's perfect for English practice! "
            "What's your favorite season and what do you like to do during that time?",
            "Weather affects our mood so much, doesn't it? How does different weather make you feel? "
            "Do you prefer staying indoors or going outside?",
        ),
    ),
    ResponseCategory(
        name="food",
        match_keywords=("food", "eat", "hungry", "cook", "restaurant"),
        candidate_replies=(
            "Food is one of my absolute favorite topics! What's your favorite dish to cook at home? "
            "Do you enjoy trying recipes from different countries?",
            "That sounds delicious! What kind of cuisine do you enjoy most? "
            "Have you ever tried cooking something completely new?",
            "Food brings people together in such beautiful ways! What's a traditional dish from your culture? "
            "I'd love to learn about it!",
        ),
    ),
    ResponseCategory(
        name="work_study",
        match_keywords=("work", "job", "study", "school", "university"),
        candidate_replies=(
            "Work and study are such important parts of our lives! What do you do for work, "
            "or what are you studying? What do you find most interesting about it?",
            "That sounds really interesting! How long have you been doing that? "
            "What's the most challenging part, and what do you enjoy most?",
            "Career and education shape us so much! What are your goals for the future? "
            "Is there something new you'd like to learn or try?",
        ),
    ),
    ResponseCategory(
        name="family",
        match_keywords=("family", "mother", "father", "sister", "brother", "parents"),
        candidate_replies=(
            "Family is so precious! Tell me about your family. Do you have siblings? "
            "What's your favorite thing to do together?",
            "That's wonderful! Family relationships are so special. "
            "What's your happiest memory with your family?",
            "Family conversations are perfect for English practice! How often do you spend time "
            "with your family? Do you have any family traditions?",
        ),
    ),
    ResponseCategory(
        name="hobbies",
        match_keywords=("hobby", "music", "movie", "book", "sport", "game"),
        candidate_replies=(
            "Hobbies make life so much more interesting! What do you love doing in your free time? "
            "How did you first get interested in that?",
            "That sounds like such a fun hobby! How often do you get to do it? "
            "Have you met other people who share the same passion?",
            "Hobbies are wonderful for relaxation and growth! What's something new you'd like to try? "
            "Do you prefer activities that are more active or more peaceful?",
        ),
    ),
    ResponseCategory(
        name="travel",
        match_keywords=("travel", "trip", "vacation", "country", "visit"),
        candidate_replies=(
            "Travel is so exciting and educational! Where would you most like to visit someday? "
            "What attracts you to that place?",
            "That sounds like an amazing experience! What's the most interesting place you've ever been to? "
            "What made it so special for you?",
            "I love hearing travel stories! Do you prefer relaxing beach vacations or adventurous "
            "city explorations? What's your dream destination?",
        ),
    ),
    ResponseCategory(
        name="language_learning",
        match_keywords=("english", "learn", "practice", "language", "improve"),
        candidate_replies=(
            "English learning is such a wonderful journey! How long have you been studying English? "
            "What's your favorite way to practice?",
            "That's fantastic that you're working on your English! What part do you find most "
            "challenging - grammar, vocabulary, pronunciation, or conversation?",
            "Keep up the excellent work with English! What motivates you to learn English? "
            "Do you have specific goals you're working toward?",
        ),
    ),
    ResponseCategory(
        name="emotion",
        match_keywords=("happy", "sad", "excited", "tired", "stressed"),
        candidate_replies=(
            "Thank you for sharing how you're feeling with me. It's important to talk about our emotions. "
            "What's been affecting your mood lately?",
            "I appreciate you being open about your feelings. That takes courage! "
            "What usually helps you when you're feeling this way?",
            "Emotions are such a big part of being human. What do you like to do to take care of "
            "yourself when you're feeling like this?",
        ),
    ),
)


DEFAULT_REPLIES: Tuple[str, ...] = (
    "That's really fascinating! I'd love to hear more about your thoughts on this. "
    "What's your personal experience with this topic?",
    "How interesting! You've got me curious now. "
    "What's the most important thing you think people should know about this?",
    "That's such a great point! I hadn't thought about it that way before. "
    "What led you to this perspective?",
    "Thank you for sharing that with me! What questions do you have about this topic? "
    "I'm here to help you explore it.",
    "That's wonderful insight! How do you think this might change or develop in the future? "
    "What are your predictions?",
    "I really appreciate you telling me about this! "
    "What advice would you give to someone who's completely new to this topic?",
    "That's absolutely fascinating! What's your favorite aspect of this? "
    "What keeps you most interested in it?",
    "What a thoughtful perspective! How do you see this connecting to other parts of your life? "
    "Does it influence other things you do?",
)
