from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate

from fitai.models.schemas import Goal, Intent

# Goal -> descriptive phrase, one table per context
WORKOUT_GOALS: Dict[Goal, str] = {
    Goal.CUTTING: "menurunkan lemak tubuh",
    Goal.BULKING: "menambah massa otot",
    Goal.RECOMPOSITION: "rekomposisi tubuh (mengurangi lemak dan menambah otot)",
}

NUTRITION_GOALS: Dict[Goal, str] = {
    Goal.CUTTING: "defisit kalori untuk menurunkan lemak",
    Goal.BULKING: "surplus kalori untuk menambah massa otot",
    Goal.RECOMPOSITION: "kalori maintenance untuk rekomposisi tubuh",
}

SLEEP_GOALS: Dict[Goal, str] = {
    Goal.CUTTING: "menurunkan lemak tubuh tanpa mengorbankan pemulihan",
    Goal.BULKING: "menambah massa otot dengan pemulihan maksimal",
    Goal.RECOMPOSITION: "rekomposisi tubuh dengan recovery yang seimbang",
}

SCHEDULE_GOALS: Dict[Goal, str] = {
    Goal.CUTTING: "menurunkan lemak tubuh dengan cardio lebih intensif",
    Goal.BULKING: "menambah massa otot dengan fokus strength training",
    Goal.RECOMPOSITION: "kombinasi strength training dan cardio moderat",
}

GENERIC_GOAL = "umum"
GENERIC_SCHEDULE_GOAL = "fitness umum"


WORKOUT_PROMPT = PromptTemplate.from_template(
    """Sebagai ahli fitness profesional, buatkan program latihan mingguan untuk:
- Berat badan: {weight} kg
- Persentase lemak tubuh: {body_fat}%
- Persentase massa otot: {muscle_mass}%
- Usia: {age} tahun
- Tujuan: {goal_text}

Berikan jadwal latihan 7 hari dengan format yang detail:
SENIN: [Nama Latihan] - [3-4 latihan spesifik dengan set x rep]
SELASA: [Nama Latihan] - [3-4 latihan spesifik dengan set x rep]
RABU: [Istirahat Aktif/Recovery] - [Aktivitas ringan]
KAMIS: [Nama Latihan] - [3-4 latihan spesifik dengan set x rep]
JUMAT: [Nama Latihan] - [3-4 latihan spesifik dengan set x rep]
SABTU: [Cardio/HIIT] - [Jenis dan durasi]
MINGGU: [Istirahat Total] - [Recovery tips]

Sesuaikan intensitas dengan kondisi fisik dan tujuan yang ingin dicapai."""
)

NUTRITION_PROMPT = PromptTemplate.from_template(
    """Sebagai ahli nutrisi olahraga, buatkan rencana diet untuk:
- Berat badan: {weight} kg
- Persentase lemak tubuh: {body_fat}%
- Persentase massa otot: {muscle_mass}%
- Usia: {age} tahun
- Tujuan: {goal_text}

Berikan panduan lengkap meliputi:
1. Target kalori harian
2. Pembagian makronutrien (protein, karbohidrat, lemak)
3. Jadwal makan (5-6 kali sehari)
4. Contoh menu harian
5. Makanan yang direkomendasikan dan dihindari
6. Tips suplemen (jika diperlukan)

Sesuaikan dengan kondisi tubuh dan target yang ingin dicapai."""
)

SLEEP_PROMPT = PromptTemplate.from_template(
    """Sebagai ahli sleep health dan recovery, buatkan rencana tidur optimal untuk:
- Berat badan: {weight} kg
- Persentase lemak tubuh: {body_fat}%
- Persentase massa otot: {muscle_mass}%
- Usia: {age} tahun
- Tujuan: {goal_text}
- Aktivitas: latihan fisik intensif

Berikan panduan meliputi:
1. Durasi tidur ideal
2. Jadwal tidur yang konsisten
3. Rutinitas sebelum tidur
4. Tips kualitas tidur
5. Hubungan tidur dengan recovery otot
6. Cara mengatasi gangguan tidur

Fokus pada optimalisasi pemulihan dan performa."""
)

SCHEDULE_PROMPT = PromptTemplate.from_template(
    """Sebagai ahli fitness, buatkan jadwal mingguan singkat untuk tujuan {goal_text}.

Berikan dalam format:
Senin: [Nama latihan singkat]
Selasa: [Nama latihan singkat]
Rabu: [Nama latihan singkat]
Kamis: [Nama latihan singkat]
Jumat: [Nama latihan singkat]
Sabtu: [Nama latihan singkat]
Minggu: [Nama latihan singkat]

Contoh: "Latihan Dada & Trisep" atau "Cardio HIIT" atau "Istirahat Aktif"."""
)

CHAT_CONTEXT = PromptTemplate.from_template(
    """
Context pengguna:
- Berat: {weight}kg, Lemak: {body_fat}%, Otot: {muscle_mass}%
- Usia: {age} tahun, Tujuan: {goal}
"""
)

CHAT_PROMPT = PromptTemplate.from_template(
    """Anda adalah FitAI, asisten fitness profesional yang ramah dan berpengetahuan luas.
{context}
Pertanyaan pengguna: "{message}"

Berikan jawaban yang:
- Relevan dengan konteks fitness/kesehatan
- Praktis dan mudah dipahami
- Menggunakan bahasa Indonesia yang natural
- Singkat tapi informatif (maksimal 100 kata)
- Mendorong pola hidup sehat

Jika pertanyaan di luar topik fitness, arahkan kembali ke topik kesehatan dengan sopan."""
)


def _metrics(profile: Any) -> Dict[str, Any]:
    return {
        "weight": profile.weight,
        "body_fat": profile.body_fat,
        "muscle_mass": profile.muscle_mass,
        "age": profile.age,
    }


def _goal_value(goal: Any) -> str:
    return getattr(goal, "value", goal) or ""


def build_workout_prompt(profile: Any) -> str:
    goal_text = WORKOUT_GOALS.get(profile.goal, GENERIC_GOAL)
    return WORKOUT_PROMPT.format(goal_text=goal_text, **_metrics(profile))


def build_nutrition_prompt(profile: Any) -> str:
    goal_text = NUTRITION_GOALS.get(profile.goal, GENERIC_GOAL)
    return NUTRITION_PROMPT.format(goal_text=goal_text, **_metrics(profile))


def build_sleep_prompt(profile: Any) -> str:
    goal_text = SLEEP_GOALS.get(profile.goal, GENERIC_GOAL)
    return SLEEP_PROMPT.format(goal_text=goal_text, **_metrics(profile))


def build_schedule_prompt(profile: Any) -> str:
    return SCHEDULE_PROMPT.format(goal_text=SCHEDULE_GOALS.get(profile.goal, GENERIC_SCHEDULE_GOAL))


def build_chat_prompt(message: str, profile: Optional[Any] = None) -> str:
    """Wrap a raw user message; the profile, when known, is appended as context."""
    context = ""
    if profile is not None:
        context = CHAT_CONTEXT.format(goal=_goal_value(profile.goal), **_metrics(profile))
    return CHAT_PROMPT.format(context=context, message=message)


def build_prompt(intent: Intent | str, profile: Optional[Any] = None, message: Optional[str] = None) -> str:
    intent = Intent(intent)
    if intent is Intent.CHAT:
        if not message:
            raise ValueError("chat intent requires a message")
        return build_chat_prompt(message, profile)
    if profile is None:
        raise ValueError(f"{intent.value} intent requires a profile")
    builders = {
        Intent.WORKOUT_PLAN: build_workout_prompt,
        Intent.NUTRITION_PLAN: build_nutrition_prompt,
        Intent.SLEEP_PLAN: build_sleep_prompt,
        Intent.WEEKLY_SCHEDULE: build_schedule_prompt,
    }
    return builders[intent](profile)
